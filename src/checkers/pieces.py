"""Defines the piece variants and their fixed properties"""

from dataclasses import dataclass, replace
from typing import Any, Self

from src.checkers.square import BOARD_DIMENSIONS, Square
from src.core.shared_types import Color, Variant

NOTATION_TO_VARIANT: dict[str, Variant] = {
    "n": Variant.NORMAL,
    "b": Variant.BAGEL,
    "p": Variant.PANCAKE,
    "x": Variant.BOMB,
    "v": Variant.VINYL,
    "f": Variant.FLYING_DISK,
}

VARIANT_TO_NOTATION: dict[Variant, str] = {
    value: key for key, value in NOTATION_TO_VARIANT.items()
}

# How much a piece is worth to its owner. The computer opponent prefers to risk its cheapest pieces.
PIECE_VALUES: dict[Variant, int] = {
    Variant.NORMAL: 0,
    Variant.BAGEL: 1,
    Variant.VINYL: 2,
    Variant.BOMB: 3,
    Variant.PANCAKE: 4,
    Variant.FLYING_DISK: 5,
}

# Draft costs shown to players. NOTE: informational only, the draft does not enforce a budget.
POWER_COSTS: dict[Variant, int] = {
    Variant.NORMAL: 0,
    Variant.BAGEL: 1,
    Variant.VINYL: 2,
    Variant.BOMB: 3,
    Variant.PANCAKE: 4,
    Variant.FLYING_DISK: 5,
}
POWER_BUDGET = 25

# Variants with a forward direction, and therefore a far rank to be crowned on
CROWNABLE_VARIANTS: frozenset[Variant] = frozenset(
    {Variant.NORMAL, Variant.BAGEL, Variant.PANCAKE}
)


def forward_direction(color: Color) -> int:
    """Red moves up the rows, blue moves down"""
    return 1 if color == Color.RED else -1


def crowning_row(color: Color) -> int:
    """The farthest rank from the owner's starting side"""
    return BOARD_DIMENSIONS[0] - 1 if color == Color.RED else 0


def home_rows(color: Color) -> range:
    """First three ranks from the owner's edge: where pieces get placed before play starts"""
    return range(0, 3) if color == Color.RED else range(5, 8)


@dataclass(frozen=True)
class Piece:
    """
    A piece is a value. Moving or crowning produces a new Piece,
    so the board never holds the same object in two slots.
    """

    id: str
    variant: Variant
    color: Color
    square: Square
    crowned: bool = False

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.variant]

    @property
    def is_crownable(self) -> bool:
        return self.variant in CROWNABLE_VARIANTS

    def moved_to(self, square: Square) -> Self:
        return replace(self, square=square)

    def crown(self) -> Self:
        return replace(self, crowned=True)

    @classmethod
    def from_notation(cls, character: str, piece_id: str, square: Square) -> Self:
        # upper case: red pieces, lower case: blue pieces
        color = Color.RED if character.isupper() else Color.BLUE
        variant = NOTATION_TO_VARIANT[character.lower()]
        return cls(piece_id, variant, color, square)

    def to_notation(self) -> str:
        character = VARIANT_TO_NOTATION[self.variant]
        character = character.upper() if self.color == Color.RED else character
        return f"{character}+" if self.crowned else character

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "variant": self.variant.value,
            "color": self.color.value,
            "row": self.square.row,
            "col": self.square.col,
            "crowned": self.crowned,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        return cls(
            id=record["id"],
            variant=Variant(record["variant"]),
            color=Color(record["color"]),
            square=Square(record["row"], record["col"]),
            crowned=record.get("crowned", False),
        )


def make_piece_id(color: Color, variant: Variant, index: int) -> str:
    """ex. red-flying_disk-0"""
    return f"{color.value}-{variant.name.lower()}-{index}"
