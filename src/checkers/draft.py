"""Draft rules: which pieces a player brings, and where they may be put down before play starts"""

from dataclasses import dataclass

from src.checkers.pieces import POWER_BUDGET, POWER_COSTS, Piece, home_rows, make_piece_id
from src.checkers.square import BOARD_DIMENSIONS, OFF_BOARD, Square
from src.core.exceptions import DraftError
from src.core.shared_types import Color, Variant

# Every player fields exactly this many pieces
ROSTER_SIZE = 12

MAX_PIECE_COUNTS: dict[Variant, int] = {
    Variant.NORMAL: 12,
    Variant.BAGEL: 6,
    Variant.PANCAKE: 6,
    Variant.BOMB: 6,
    Variant.VINYL: 6,
    Variant.FLYING_DISK: 6,
}

Selection = dict[Variant, int]


@dataclass(frozen=True)
class PieceSelection:
    """What the draft screen shows per variant"""

    variant: Variant
    count: int
    maximum: int
    cost: int


def empty_selection() -> Selection:
    return {variant: 0 for variant in Variant}


def selection_total(selection: Selection) -> int:
    return sum(selection.values())


def power_spent(selection: Selection) -> int:
    """Power points the selection would cost. Not enforced anywhere, for display only."""
    return sum(POWER_COSTS[variant] * count for variant, count in selection.items())


def remaining_power(selection: Selection) -> int:
    """Negative once the selection goes over budget"""
    return POWER_BUDGET - power_spent(selection)


def piece_selections(selection: Selection) -> list[PieceSelection]:
    return [
        PieceSelection(
            variant,
            selection.get(variant, 0),
            MAX_PIECE_COUNTS[variant],
            POWER_COSTS[variant],
        )
        for variant in Variant
    ]


def validate_selection(selection: Selection) -> None:
    """Counts must lie within [0, max] per variant and may not exceed the roster size in total"""
    for variant, count in selection.items():
        if not 0 <= count <= MAX_PIECE_COUNTS[variant]:
            raise DraftError(
                f"Cannot select {count} {variant.value} pieces (allowed: 0 - {MAX_PIECE_COUNTS[variant]})."
            )
    if selection_total(selection) > ROSTER_SIZE:
        raise DraftError(
            f"Cannot select {selection_total(selection)} pieces. A roster holds {ROSTER_SIZE} pieces."
        )


def adjust_selection(selection: Selection, variant: Variant, delta: int) -> Selection:
    """Add or remove one piece of a variant. Returns a new selection, the given one is left untouched."""
    if delta not in (-1, 1):
        raise DraftError(f"Selections change one piece at a time, got {delta}.")
    adjusted = {**empty_selection(), **selection}
    adjusted[variant] += delta
    validate_selection(adjusted)
    return adjusted


def toggle_selection(selection: Selection, variant: Variant) -> Selection:
    """
    Draft screen behaviour of clicking a variant:
    add one while both the variant maximum and the roster size allow it, otherwise take one away.
    """
    toggled = {**empty_selection(), **selection}
    if (
        toggled[variant] < MAX_PIECE_COUNTS[variant]
        and selection_total(toggled) < ROSTER_SIZE
    ):
        toggled[variant] += 1
    elif toggled[variant] > 0:
        toggled[variant] -= 1
    return toggled


def is_complete(selection: Selection) -> bool:
    return selection_total(selection) == ROSTER_SIZE


def generate_roster(color: Color, selection: Selection) -> list[Piece]:
    """Create the pieces a player drafted. They stand OFF_BOARD until placed."""
    return [
        Piece(make_piece_id(color, variant, index), variant, color, OFF_BOARD)
        for variant in Variant
        for index in range(selection.get(variant, 0))
    ]


def placement_squares(color: Color) -> list[Square]:
    """Dark squares on the first three ranks from the owner's edge"""
    return [
        Square(row, col)
        for row in home_rows(color)
        for col in range(BOARD_DIMENSIONS[1])
        if Square(row, col).is_dark()
    ]


def is_placement_square(color: Color, square: Square) -> bool:
    return square.is_within_bounds() and square.is_dark() and square.row in home_rows(color)
