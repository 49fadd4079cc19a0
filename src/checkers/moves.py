"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the legal destinations for each piece variant,
and (separately) which moves of that variant count as a capture.

Every function in here is pure: boards are read, never written.
Off-board or occupied targets are simply not generated, they are never an error.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Self, Sequence

from src.checkers.pieces import Piece, crowning_row, forward_direction
from src.checkers.square import Square
from src.core.shared_types import Color, Variant


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def is_opponent(self, square: Square, color: Color) -> bool: ...
    def pieces(self, color: Optional[Color] = None) -> list[Piece]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """A move as it was (or will be) played. `piece` is the piece as it stood before moving."""

    piece: Piece
    from_square: Square
    to_square: Square
    captured: Optional[Piece] = None

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_record(self) -> dict[str, Any]:
        return {
            "piece": self.piece.to_record(),
            "from": list(self.from_square.to_tuple()),
            "to": list(self.to_square.to_tuple()),
            "captured": self.captured.to_record() if self.captured else None,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        captured = record.get("captured")
        return cls(
            piece=Piece.from_record(record["piece"]),
            from_square=Square(*record["from"]),
            to_square=Square(*record["to"]),
            captured=Piece.from_record(captured) if captured else None,
        )


@dataclass(frozen=True)
class CaptureResult:
    captured_piece: Optional[Piece] = None
    captured_square: Optional[Square] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None


History = Sequence[Move]

LATERAL: list[Vector] = [(0, -1), (0, 1)]


def diagonal_directions(piece: Piece) -> list[Vector]:
    """Forward diagonals. Crowned pieces get the two backward diagonals as well."""
    forward = forward_direction(piece.color)
    directions: list[Vector] = [(forward, -1), (forward, 1)]
    if piece.crowned:
        directions.extend([(-forward, -1), (-forward, 1)])
    return directions


# --- MOVEMENT RULES ---
def single_step_moves(
    piece: Piece, board: Board, directions: list[Vector]
) -> list[Square]:
    """One square along each direction, onto an empty square"""
    moves: list[Square] = []
    for d_row, d_col in directions:
        target_square = piece.square.offset(d_row, d_col)
        if target_square.is_within_bounds() and board.is_empty(target_square):
            moves.append(target_square)
    return moves


def jump_moves(piece: Piece, board: Board, directions: list[Vector]) -> list[Square]:
    """Two squares along each direction, over an adjacent opponent's piece, onto an empty square"""
    moves: list[Square] = []
    for d_row, d_col in directions:
        jumped_square = piece.square.offset(d_row, d_col)
        landing_square = piece.square.offset(2 * d_row, 2 * d_col)
        if not landing_square.is_within_bounds():
            continue

        if board.is_opponent(jumped_square, piece.color) and board.is_empty(
            landing_square
        ):
            moves.append(landing_square)
    return moves


def is_diagonally_reachable(piece: Piece, target: Square) -> bool:
    """Same diagonal, any distance. Uncrowned pieces can only look forward."""
    d_row = target.row - piece.square.row
    d_col = target.col - piece.square.col
    if d_row == 0 or abs(d_row) != abs(d_col):
        return False

    if not piece.crowned and (d_row > 0) != (forward_direction(piece.color) > 0):
        return False
    return True


def last_move_by_opponent(history: History, color: Color) -> Optional[Move]:
    """The move played right before this one, if the opponent made it"""
    if not history:
        return None
    last_move = history[-1]
    return last_move if last_move.color != color else None


def candidate_normal_moves(
    piece: Piece, board: Board, history: History = ()
) -> list[Square]:
    """
    A normal piece:
    - steps one square diagonally forward
    - jumps two squares diagonally forward over an opponent's piece (taking it)
    - once crowned: may do both backwards as well
    """
    directions = diagonal_directions(piece)
    return single_step_moves(piece, board, directions) + jump_moves(
        piece, board, directions
    )


def candidate_bagel_moves(
    piece: Piece, board: Board, history: History = ()
) -> list[Square]:
    """
    Moves like a normal piece.

    Special: if the opponent just moved, the bagel may land on the square that piece left behind,
    as long as that square lies (forward) on one of the bagel's diagonals and is still empty.
    """
    moves = candidate_normal_moves(piece, board, history)
    last_move = last_move_by_opponent(history, piece.color)
    if last_move is None:
        return moves

    target_square = last_move.from_square
    if (
        target_square not in moves
        and is_diagonally_reachable(piece, target_square)
        and board.is_empty(target_square)
    ):
        moves.append(target_square)
    return moves


def candidate_pancake_moves(
    piece: Piece, board: Board, history: History = ()
) -> list[Square]:
    """Moves like a normal piece, and can also step or jump sideways along its row."""
    moves = candidate_normal_moves(piece, board, history)
    moves.extend(single_step_moves(piece, board, LATERAL))
    moves.extend(jump_moves(piece, board, LATERAL))
    return moves


def immobile(piece: Piece, board: Board, history: History = ()) -> list[Square]:
    """
    Bomb, vinyl and flying disk have no movement rules yet.
    They stay put rather than silently moving like a normal piece.
    """
    return []


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board, History], list[Square]]
MOVEMENT_RULES: dict[Variant, CandidateMovesFn] = {
    Variant.NORMAL: candidate_normal_moves,
    Variant.BAGEL: candidate_bagel_moves,
    Variant.PANCAKE: candidate_pancake_moves,
    Variant.BOMB: immobile,
    Variant.VINYL: immobile,
    Variant.FLYING_DISK: immobile,
}


# --- CAPTURING RULES ---
def diagonal_jump_midpoint(from_square: Square, to_square: Square) -> Optional[Square]:
    """A jump of exactly two squares along a diagonal passes over its midpoint"""
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    if abs(d_row) == 2 and abs(d_col) == 2:
        return from_square.midpoint(to_square)
    return None


def pancake_jump_midpoint(from_square: Square, to_square: Square) -> Optional[Square]:
    """Diagonal jumps, plus jumps of two squares sideways along the row"""
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    if d_row == 0 and abs(d_col) == 2:
        return from_square.midpoint(to_square)
    return diagonal_jump_midpoint(from_square, to_square)


def no_jump(from_square: Square, to_square: Square) -> Optional[Square]:
    return None


# --- STRATEGY PATTERN: CAPTURING RULES ---
JumpMidpointFn = Callable[[Square, Square], Optional[Square]]
CAPTURE_RULES: dict[Variant, JumpMidpointFn] = {
    Variant.NORMAL: diagonal_jump_midpoint,
    Variant.BAGEL: diagonal_jump_midpoint,
    Variant.PANCAKE: pancake_jump_midpoint,
    Variant.BOMB: no_jump,
    Variant.VINYL: no_jump,
    Variant.FLYING_DISK: no_jump,
}


# --- ENTRYPOINTS USED BY GAME / AI ---
def legal_destinations(board: Board, piece: Piece, history: History = ()) -> list[Square]:
    """Complete set of squares the piece may move to (no duplicates)"""
    movement_rule = MOVEMENT_RULES[piece.variant]
    return list(dict.fromkeys(movement_rule(piece, board, history)))


def is_valid_move(
    board: Board,
    from_square: Square,
    to_square: Square,
    piece: Piece,
    history: History = (),
) -> bool:
    """
    Validation IS membership of the generated destinations, never a second rule set.
    The moves shown to a player and the moves accepted must not differ.
    """
    placed = board.piece(from_square)
    if placed is None or placed.id != piece.id:
        return False
    return to_square in legal_destinations(board, placed, history)


def resolve_capture(
    board: Board, from_square: Square, to_square: Square, piece: Piece
) -> CaptureResult:
    """
    Which piece (if any) gets taken by this move.

    The geometry must be a jump for this variant AND the jumped square must hold an opponent's piece.
    An empty or friendly midpoint never counts, even if someone calls this without generating the move first.
    """
    jump_midpoint = CAPTURE_RULES[piece.variant]
    jumped_square = jump_midpoint(from_square, to_square)
    if jumped_square is None:
        return CaptureResult()

    jumped_piece = board.piece(jumped_square)
    if jumped_piece is None or jumped_piece.color == piece.color:
        return CaptureResult()
    return CaptureResult(captured_piece=jumped_piece, captured_square=jumped_square)


def should_crown(piece: Piece, to_square: Square) -> bool:
    """Landing on the far rank crowns a piece (once, for the rest of the game)"""
    return (
        piece.is_crownable
        and not piece.crowned
        and to_square.row == crowning_row(piece.color)
    )


def generate_moves(board: Board, color: Color, history: History = ()) -> list[Move]:
    """Every legal (piece, destination) pair of a player, with the capture already resolved"""
    moves: list[Move] = []
    for piece in board.pieces(color):
        for to_square in legal_destinations(board, piece, history):
            capture = resolve_capture(board, piece.square, to_square, piece)
            moves.append(Move(piece, piece.square, to_square, capture.captured_piece))
    return moves


def has_legal_move(board: Board, color: Color, history: History = ()) -> bool:
    return any(
        legal_destinations(board, piece, history) for piece in board.pieces(color)
    )
