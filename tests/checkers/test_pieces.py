"""Unit tests for /src/checkers/pieces.py"""

import pytest

from src.checkers.pieces import (
    CROWNABLE_VARIANTS,
    NOTATION_TO_VARIANT,
    PIECE_VALUES,
    POWER_COSTS,
    Piece,
    crowning_row,
    forward_direction,
    home_rows,
    make_piece_id,
)
from src.checkers.square import Square
from src.core.shared_types import Color, Variant


def test_every_variant_has_properties() -> None:
    """All lookup tables cover every variant"""
    for variant in Variant:
        assert variant in PIECE_VALUES
        assert variant in POWER_COSTS
    assert set(NOTATION_TO_VARIANT.values()) == set(Variant)


def test_only_moving_variants_are_crownable() -> None:
    assert CROWNABLE_VARIANTS == {Variant.NORMAL, Variant.BAGEL, Variant.PANCAKE}


@pytest.mark.parametrize(
    "color, forward, far_row, rows",
    [
        (Color.RED, 1, 7, [0, 1, 2]),
        (Color.BLUE, -1, 0, [5, 6, 7]),
    ],
)
def test_orientation(color: Color, forward: int, far_row: int, rows: list[int]) -> None:
    assert forward_direction(color) == forward
    assert crowning_row(color) == far_row
    assert list(home_rows(color)) == rows


def test_opponent_color() -> None:
    assert Color.RED.opponent == Color.BLUE
    assert Color.BLUE.opponent == Color.RED


@pytest.mark.parametrize(
    "character, variant, color",
    [
        ("N", Variant.NORMAL, Color.RED),
        ("b", Variant.BAGEL, Color.BLUE),
        ("P", Variant.PANCAKE, Color.RED),
        ("x", Variant.BOMB, Color.BLUE),
        ("V", Variant.VINYL, Color.RED),
        ("f", Variant.FLYING_DISK, Color.BLUE),
    ],
)
def test_piece_from_notation(character: str, variant: Variant, color: Color) -> None:
    piece = Piece.from_notation(character, "some-id", Square(3, 4))
    assert piece.variant == variant
    assert piece.color == color
    assert piece.square == Square(3, 4)
    assert not piece.crowned
    assert piece.to_notation() == character


def test_crowned_piece_notation() -> None:
    piece = Piece("red-normal-0", Variant.NORMAL, Color.RED, Square(7, 0)).crown()
    assert piece.to_notation() == "N+"


def test_pieces_are_immutable_values() -> None:
    """Moving and crowning hand out new pieces, the piece itself stays as it was"""
    piece = Piece("blue-bagel-0", Variant.BAGEL, Color.BLUE, Square(5, 0))
    moved = piece.moved_to(Square(4, 1))
    crowned = moved.crown()

    assert piece.square == Square(5, 0)
    assert moved.square == Square(4, 1)
    assert not moved.crowned
    assert crowned.crowned
    assert crowned.id == piece.id


def test_piece_record_round_trip() -> None:
    piece = Piece("red-flying_disk-1", Variant.FLYING_DISK, Color.RED, Square(1, 2), True)
    record = piece.to_record()
    assert record == {
        "id": "red-flying_disk-1",
        "variant": "flying disk",
        "color": "red",
        "row": 1,
        "col": 2,
        "crowned": True,
    }
    assert Piece.from_record(record) == piece


def test_piece_ids() -> None:
    assert make_piece_id(Color.RED, Variant.FLYING_DISK, 0) == "red-flying_disk-0"
    assert make_piece_id(Color.BLUE, Variant.NORMAL, 11) == "blue-normal-11"
