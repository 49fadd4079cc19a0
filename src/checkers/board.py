"""The Game board: which piece stands where. Pure data, the rules live in moves.py"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.checkers.pieces import NOTATION_TO_VARIANT, Piece, make_piece_id
from src.checkers.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import (
    ContractViolationError,
    InvalidNotationError,
    PieceNotFoundError,
)
from src.core.shared_types import Color, Variant

EMPTY_NOTATION = "/".join(["8"] * BOARD_DIMENSIONS[0])


@dataclass
class Board:
    # Only occupied squares are stored. A missing key is an empty square.
    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Self:
        return cls({})

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """Construct a board from its text form.

        Ranks are separated by slashes, starting with row 0 (red's edge):
        * a letter is a piece: n(ormal), b(agel), p(ancake), (bomb) x, v(inyl), f(lying disk)
        * upper case are red pieces, lower case blue pieces
        * a '+' directly after a letter marks that piece as crowned
        * a digit denotes that many empty squares in a row

        ex. red normal on (2,3) and a blue normal on (3,4):
        8/8/3N4/4n3/8/8/8/8

        Pieces get the ids <color>-<variant>-<index> (see make_piece_id), counted in reading order.
        """
        ranks = notation.split("/")
        if len(ranks) != BOARD_DIMENSIONS[0]:
            raise InvalidNotationError(
                f"Expected {BOARD_DIMENSIONS[0]} ranks, got {len(ranks)}: {notation!r}"
            )

        board = cls.empty()
        counters: dict[tuple[Color, Variant], int] = {}
        for row, rank in enumerate(ranks):
            col = 0
            for character in rank:
                if character.isdigit():
                    col += int(character)
                elif character == "+":
                    last = board.piece(Square(row, col - 1)) if col > 0 else None
                    if last is None or last.crowned:
                        raise InvalidNotationError(
                            f"'+' must follow a piece in rank {row}: {rank!r}"
                        )
                    board.position[last.square] = last.crown()
                elif character.lower() in NOTATION_TO_VARIANT:
                    color = Color.RED if character.isupper() else Color.BLUE
                    variant = NOTATION_TO_VARIANT[character.lower()]
                    index = counters.get((color, variant), 0)
                    counters[(color, variant)] = index + 1
                    square = Square(row, col)
                    board.position[square] = Piece.from_notation(
                        character, make_piece_id(color, variant, index), square
                    )
                    col += 1
                else:
                    raise InvalidNotationError(
                        f"Unknown character {character!r} in rank {row}: {rank!r}"
                    )
            if col != BOARD_DIMENSIONS[1]:
                raise InvalidNotationError(
                    f"Rank {row} describes {col} squares instead of {BOARD_DIMENSIONS[1]}: {rank!r}"
                )
        return board

    def to_notation(self) -> str:
        return "/".join(self._rank_to_notation(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_notation(self, row: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_notation())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def is_opponent(self, square: Square, color: Color) -> bool:
        """Is there a piece of the other player standing on this square?"""
        piece = self.piece(square)
        return piece is not None and piece.color != color

    def pieces(self, color: Optional[Color] = None) -> list[Piece]:
        """All pieces (of one color), in reading order"""
        return [
            self.position[square]
            for square in sorted(self.position)
            if color is None or self.position[square].color == color
        ]

    def locate(self, piece_id: str) -> Optional[Piece]:
        return next(
            (piece for piece in self.position.values() if piece.id == piece_id), None
        )

    def count_pieces(self) -> dict[Color, int]:
        return {color: len(self.pieces(color)) for color in Color}

    def place_piece(self, piece: Piece) -> None:
        """Put a piece onto the square it claims to stand on"""
        if not piece.square.is_within_bounds():
            raise ContractViolationError(f"{piece.square} is not on the board.")
        if not self.is_empty(piece.square):
            raise ContractViolationError(
                f"Cannot place {piece.id} on {piece.square}: occupied by {self.position[piece.square].id}"
            )
        self.position[piece.square] = piece

    def remove_piece(self, square: Square) -> Piece:
        if square not in self.position:
            raise PieceNotFoundError(f"No piece on {square}.")
        return self.position.pop(square)

    def move_piece(self, from_square: Square, to_square: Square) -> Piece:
        """Update the position on the board: remove, then place the moved piece. Returns the piece as it now stands."""
        piece = self.remove_piece(from_square)
        moved = piece.moved_to(to_square)
        self.place_piece(moved)
        return moved

    def replace_piece(self, piece: Piece) -> None:
        """Swap the piece on its square for an updated version of itself (ex. after crowning)"""
        current = self.piece(piece.square)
        if current is None or current.id != piece.id:
            raise PieceNotFoundError(f"{piece.id} is not standing on {piece.square}.")
        self.position[piece.square] = piece

    def copy(self) -> Self:
        # pieces are immutable, a shallow copy of the mapping is enough
        return type(self)(dict(self.position))
