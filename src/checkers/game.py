"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to go through the phases of a game:

Menu -> Draft -> Placement -> Play -> Game Over (and back to the Menu from anywhere)

The Game owns exactly one GameState value. Every command builds a complete new GameState from the current one
and commits it with a single assignment. A rejected command raises before that assignment, so nothing changes.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self, TypeVar

from loguru import logger

from src.checkers.board import Board
from src.checkers.draft import (
    ROSTER_SIZE,
    Selection,
    adjust_selection,
    empty_selection,
    generate_roster,
    is_complete,
    is_placement_square,
    placement_squares,
    selection_total,
    toggle_selection,
    validate_selection,
)
from src.checkers.moves import (
    Move,
    generate_moves,
    has_legal_move,
    is_valid_move,
    legal_destinations,
    resolve_capture,
    should_crown,
)
from src.checkers.outcome import check_win_condition
from src.checkers.pieces import Piece
from src.checkers.square import Square
from src.core.exceptions import (
    DraftError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    PieceNotFoundError,
    PlacementError,
)
from src.core.models import GameModel
from src.core.shared_types import Color, Difficulty, Phase, Variant


T = TypeVar("T")


def _per_player(value: T) -> dict[Color, T]:
    return {color: value for color in Color}


@dataclass(frozen=True)
class GameState:
    """
    Single source of truth of a game.
    ----

    Frozen, and the containers inside are never modified after construction:
    a new state always gets fresh containers for the parts that changed.
    """

    phase: Phase = Phase.MENU
    active_player: Color = Color.RED
    board: Board = field(default_factory=Board.empty)
    scores: dict[Color, int] = field(default_factory=lambda: _per_player(0))
    captured: dict[Color, tuple[Piece, ...]] = field(
        default_factory=lambda: _per_player(())
    )
    piece_counts: dict[Color, int] = field(default_factory=lambda: _per_player(0))
    history: tuple[Move, ...] = ()
    selections: dict[Color, Selection] = field(
        default_factory=lambda: {color: empty_selection() for color in Color}
    )
    # drafted pieces that still wait to be placed
    rosters: dict[Color, tuple[Piece, ...]] = field(
        default_factory=lambda: _per_player(())
    )
    active: bool = False
    winner: Optional[Color] = None
    version: int = 0


class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    def __init__(
        self,
        state: Optional[GameState] = None,
        ai_difficulty: Optional[Difficulty] = None,
        ai_color: Optional[Color] = None,
    ) -> None:
        self.state = state if state is not None else GameState()
        self.ai_difficulty = ai_difficulty
        self.ai_color = ai_color if ai_difficulty is not None else None

    @classmethod
    def new_game(
        cls, ai_difficulty: Optional[Difficulty] = None, ai_color: Color = Color.BLUE
    ) -> Self:
        """A fresh game sitting in the menu. Pass a difficulty to play against the computer."""
        return cls(GameState(), ai_difficulty, ai_color)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        phase_name = model.phase.replace(" ", "_").upper()
        if phase_name not in Phase.__members__:
            raise GameStateError(
                f"Invalid phase: {model.phase!r}. \nPick one from {','.join([phase.value for phase in Phase])}"
            )

        board = Board.empty()
        for record in model.board:
            board.place_piece(Piece.from_record(record))

        state = GameState(
            phase=Phase[phase_name],
            active_player=Color(model.active_player),
            board=board,
            scores={color: model.scores.get(color.value, 0) for color in Color},
            captured={
                color: tuple(
                    Piece.from_record(record)
                    for record in model.captured.get(color.value, [])
                )
                for color in Color
            },
            piece_counts={
                color: model.piece_counts.get(color.value, 0) for color in Color
            },
            history=tuple(Move.from_record(record) for record in model.move_history),
            selections={
                color: {
                    **empty_selection(),
                    **{
                        Variant(name): count
                        for name, count in model.selections.get(color.value, {}).items()
                    },
                }
                for color in Color
            },
            rosters={
                color: tuple(
                    Piece.from_record(record)
                    for record in model.rosters.get(color.value, [])
                )
                for color in Color
            },
            active=model.active,
            winner=Color(model.winner) if model.winner else None,
            version=model.version,
        )
        ai_difficulty = Difficulty(model.ai_difficulty) if model.ai_difficulty else None
        ai_color = Color(model.ai_color) if model.ai_color else None
        return cls(state, ai_difficulty, ai_color)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        state = self.state
        return GameModel(
            phase=state.phase.value,
            active_player=state.active_player.value,
            board=[piece.to_record() for piece in state.board.pieces()],
            scores={color.value: state.scores[color] for color in Color},
            captured={
                color.value: [piece.to_record() for piece in state.captured[color]]
                for color in Color
            },
            piece_counts={color.value: state.piece_counts[color] for color in Color},
            move_history=[move.to_record() for move in state.history],
            selections={
                color.value: {
                    variant.value: count
                    for variant, count in state.selections[color].items()
                }
                for color in Color
            },
            rosters={
                color.value: [piece.to_record() for piece in state.rosters[color]]
                for color in Color
            },
            active=state.active,
            winner=state.winner.value if state.winner else None,
            version=state.version,
            ai_difficulty=self.ai_difficulty.value if self.ai_difficulty else None,
            ai_color=self.ai_color.value if self.ai_color else None,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def winner(self) -> Optional[Color]:
        """Only set once the game is over. None after game over means nobody could move anymore (draw)."""
        if self.state.phase != Phase.GAME_OVER:
            return None
        return self.state.winner

    # --- PHASE TRANSITIONS ---
    def start_game(self) -> GameState:
        """Menu (or a finished game) -> Draft. Everything from a previous game is cleared."""
        self._assert_phase(Phase.MENU, Phase.GAME_OVER)
        self._commit(replace(GameState(), phase=Phase.DRAFT))
        return self.state

    def reset(self) -> GameState:
        """Back to the menu, from any phase"""
        self._commit(GameState())
        return self.state

    def update_selection(self, color: Color, variant: Variant, delta: int) -> GameState:
        """Add (+1) or remove (-1) one piece of a variant from a player's draft"""
        self._assert_phase(Phase.DRAFT)
        adjusted = adjust_selection(self.state.selections[color], variant, delta)
        self._commit(self._with_selection(color, adjusted))
        return self.state

    def toggle_selection(self, color: Color, variant: Variant) -> GameState:
        self._assert_phase(Phase.DRAFT)
        toggled = toggle_selection(self.state.selections[color], variant)
        self._commit(self._with_selection(color, toggled))
        return self.state

    def submit_selection(self, color: Color, selection: Selection) -> GameState:
        """Replace a player's whole draft at once"""
        self._assert_phase(Phase.DRAFT)
        new_selection = {**empty_selection(), **selection}
        validate_selection(new_selection)
        self._commit(self._with_selection(color, new_selection))
        return self.state

    def finish_draft(self) -> GameState:
        """
        Draft -> Placement
        ----

        Guarded: both players must have selected exactly ROSTER_SIZE pieces.
        On success the drafted pieces are created and wait (off the board) to be placed on an empty board.
        """
        self._assert_phase(Phase.DRAFT)
        selections = self.state.selections
        incomplete = [color for color in Color if not is_complete(selections[color])]
        if incomplete:
            totals = ", ".join(
                f"{color.value}: {selection_total(selections[color])}" for color in Color
            )
            raise DraftError(
                f"Each player must select exactly {ROSTER_SIZE} pieces ({totals})."
            )

        self._commit(
            replace(
                self.state,
                phase=Phase.PLACEMENT,
                board=Board.empty(),
                rosters={
                    color: tuple(generate_roster(color, selections[color]))
                    for color in Color
                },
                piece_counts={
                    color: selection_total(selections[color]) for color in Color
                },
                active=True,
            )
        )
        return self.state

    def place_piece(self, piece_id: str, square: Square) -> GameState:
        """Put one drafted piece on one empty, dark square of its owner's first three ranks"""
        self._assert_phase(Phase.PLACEMENT)
        piece = self._find_unplaced(piece_id)

        if not is_placement_square(piece.color, square):
            raise PlacementError(
                f"{piece.color.value} cannot place pieces on {square}."
            )
        if not self.state.board.is_empty(square):
            raise PlacementError(f"{square} is already occupied.")

        board = self.state.board.copy()
        board.place_piece(piece.moved_to(square))
        rosters = dict(self.state.rosters)
        rosters[piece.color] = tuple(
            unplaced for unplaced in rosters[piece.color] if unplaced.id != piece_id
        )
        self._commit(replace(self.state, board=board, rosters=rosters))
        return self.state

    def placement_squares(self, color: Color) -> list[Square]:
        """Squares still available to this player during placement"""
        return [
            square
            for square in placement_squares(color)
            if self.state.board.is_empty(square)
        ]

    def finish_placement(self) -> GameState:
        """
        Placement -> Play. Red always moves first.
        ----
        Pieces left unplaced stay out of the game: the remaining counts follow what stands on the board.
        """
        self._assert_phase(Phase.PLACEMENT)
        self._commit(
            replace(
                self.state,
                phase=Phase.PLAY,
                active_player=Color.RED,
                piece_counts=self.state.board.count_pieces(),
                rosters=_per_player(()),
            )
        )
        return self.state

    # --- PLAY ---
    def legal_moves(self, square: Square) -> list[Square]:
        """
        Destinations of the piece on the given square.
        ----
        Used to highlight squares. The exact same function gates `make_move`.
        """
        piece = self.state.board.piece(square)
        if piece is None:
            raise PieceNotFoundError(f"No piece on {square}.")
        return legal_destinations(self.state.board, piece, self.state.history)

    def all_legal_moves(self, color: Color) -> list[Move]:
        return generate_moves(self.state.board, color, self.state.history)

    def make_move(
        self, from_square: Square, to_square: Square, piece_id: Optional[str] = None
    ) -> GameState:
        """
        Attempt to make a move
        -----

        1. check phase, piece reference and turn
        2. check the destination is one of the generated moves
        3. resolve the capture (score, captured list and piece count)
        4. update the board, crown the piece if it reached the far rank
        5. record the move and hand the turn to the opponent
        6. check for the end of the game

        All of it lands as one new GameState.
        """
        self._assert_phase(Phase.PLAY)
        state = self.state

        piece = state.board.piece(from_square)
        if piece is None or (piece_id is not None and piece.id != piece_id):
            label = f"{piece_id} " if piece_id else ""
            raise PieceNotFoundError(f"Piece {label}not found on {from_square}.")

        player = state.active_player
        if piece.color != player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {player.value} to make a move first."
            )

        if not is_valid_move(state.board, from_square, to_square, piece, state.history):
            raise IllegalMoveError(
                f"Move not allowed: {piece.id} from {from_square} to {to_square}"
            )

        opponent = player.opponent
        capture = resolve_capture(state.board, from_square, to_square, piece)
        board = state.board.copy()
        scores = dict(state.scores)
        captured = dict(state.captured)
        piece_counts = dict(state.piece_counts)
        if capture.captured_piece is not None and capture.captured_square is not None:
            board.remove_piece(capture.captured_square)
            scores[player] += 1
            captured[player] = captured[player] + (capture.captured_piece,)
            piece_counts[opponent] -= 1

        moved_piece = board.move_piece(from_square, to_square)
        if should_crown(piece, to_square):
            board.replace_piece(moved_piece.crown())
            logger.debug(f"{piece.id} is crowned on {to_square}")

        move = Move(piece, from_square, to_square, capture.captured_piece)
        history = state.history + (move,)
        result = check_win_condition(board, piece_counts, history)

        self._commit(
            replace(
                state,
                phase=Phase.GAME_OVER if result.game_over else Phase.PLAY,
                active_player=opponent,
                board=board,
                scores=scores,
                captured=captured,
                piece_counts=piece_counts,
                history=history,
                active=not result.game_over,
                winner=result.winner,
            )
        )
        if result.game_over:
            logger.info(
                f"Game over after {len(history)} moves. Winner: {result.winner.value if result.winner else 'none'}"
            )
        return self.state

    def declare_immobilized(self, color: Color) -> GameState:
        """
        The player to move has nothing to play (ex. the computer found no move): the opponent wins.
        Rejected when the player does have a legal move.
        """
        self._assert_phase(Phase.PLAY)
        if color != self.state.active_player:
            raise NotYourTurnError(
                f"It is not {color.value}'s turn. Waiting for {self.state.active_player.value}."
            )
        if has_legal_move(self.state.board, color, self.state.history):
            raise IllegalMoveError(f"{color.value} still has a legal move.")

        self._commit(
            replace(
                self.state,
                phase=Phase.GAME_OVER,
                active=False,
                winner=color.opponent,
            )
        )
        return self.state

    # -- PRIVATE HELPERS ---
    def _commit(self, new_state: GameState) -> None:
        """The only place where the game state gets replaced"""
        previous = self.state
        self.state = replace(new_state, version=previous.version + 1)
        if previous.phase != new_state.phase:
            logger.info(
                f"Phase {previous.phase.value} -> {new_state.phase.value} (version {self.state.version})"
            )

    def _assert_phase(self, *phases: Phase) -> None:
        if self.state.phase not in phases:
            raise GameStateError(
                f"Not allowed in phase {self.state.phase.value!r}. Expected: {', '.join(phase.value for phase in phases)}"
            )

    def _with_selection(self, color: Color, selection: Selection) -> GameState:
        selections = dict(self.state.selections)
        selections[color] = selection
        return replace(self.state, selections=selections)

    def _find_unplaced(self, piece_id: str) -> Piece:
        for roster in self.state.rosters.values():
            for piece in roster:
                if piece.id == piece_id:
                    return piece

        if self.state.board.locate(piece_id) is not None:
            raise PlacementError(f"{piece_id} has already been placed.")
        raise PieceNotFoundError(f"No drafted piece with id {piece_id!r}.")
