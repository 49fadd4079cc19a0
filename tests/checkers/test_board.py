"""Unit tests for /src/checkers/board.py"""

import pytest

from src.checkers.board import EMPTY_NOTATION, Board
from src.checkers.pieces import Piece
from src.checkers.square import OFF_BOARD, Square
from src.core.exceptions import (
    ContractViolationError,
    InvalidNotationError,
    PieceNotFoundError,
)
from src.core.shared_types import Color, Variant

# red normal on (2,3), blue normal on (3,4)
TWO_PIECES = "8/8/3N4/4n3/8/8/8/8"


# --- NOTATION ---
def test_empty_board() -> None:
    board = Board.from_notation(EMPTY_NOTATION)
    assert board.pieces() == []
    assert board.to_notation() == EMPTY_NOTATION


def test_parse_notation() -> None:
    board = Board.from_notation(TWO_PIECES)

    red = board.piece(Square(2, 3))
    blue = board.piece(Square(3, 4))
    assert red == Piece("red-normal-0", Variant.NORMAL, Color.RED, Square(2, 3))
    assert blue == Piece("blue-normal-0", Variant.NORMAL, Color.BLUE, Square(3, 4))
    assert len(board.pieces()) == 2


def test_ids_count_per_color_and_variant() -> None:
    board = Board.from_notation("1N1N1P2/8/8/8/8/8/8/n1n5")
    assert [piece.id for piece in board.pieces()] == [
        "red-normal-0",
        "red-normal-1",
        "red-pancake-0",
        "blue-normal-0",
        "blue-normal-1",
    ]


def test_parse_crowned_pieces() -> None:
    board = Board.from_notation("8/8/8/8/8/8/8/N+1b+5")
    red = board.piece(Square(7, 0))
    blue = board.piece(Square(7, 2))
    assert red is not None and red.crowned
    assert blue is not None and blue.crowned


@pytest.mark.parametrize(
    "notation",
    [
        TWO_PIECES,
        "1N1N1N1N/N1N1N1N1/1N1N1N1N/8/8/n1n1n1n1/1n1n1n1n/n1n1n1n1",
        "1B1P1X1V/F+7/8/8/8/8/1b+6/6f1",
        EMPTY_NOTATION,
    ],
)
def test_notation_round_trip(notation: str) -> None:
    assert Board.from_notation(notation).to_notation() == notation


@pytest.mark.parametrize(
    "notation",
    [
        "8/8/8/8/8/8/8",  # 7 ranks
        "8/8/8/8/8/8/8/8/8",  # 9 ranks
        "8/8/3N3/8/8/8/8/8",  # rank too short
        "8/8/3N5/8/8/8/8/8",  # rank too long
        "8/8/3Q4/8/8/8/8/8",  # unknown piece
        "+7/8/8/8/8/8/8/8",  # crown without a piece
        "N++7/8/8/8/8/8/8/8",  # crowned twice
    ],
)
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(InvalidNotationError):
        _ = Board.from_notation(notation)


# --- QUERIES ---
def test_board_queries() -> None:
    board = Board.from_notation(TWO_PIECES)
    assert board.is_empty(Square(0, 0))
    assert not board.is_empty(Square(2, 3))
    assert board.is_opponent(Square(3, 4), Color.RED)
    assert not board.is_opponent(Square(2, 3), Color.RED)
    assert not board.is_opponent(Square(0, 0), Color.RED)
    assert [piece.id for piece in board.pieces(Color.BLUE)] == ["blue-normal-0"]
    assert board.count_pieces() == {Color.RED: 1, Color.BLUE: 1}


def test_locate_piece_by_id() -> None:
    board = Board.from_notation(TWO_PIECES)
    located = board.locate("blue-normal-0")
    assert located is not None
    assert located.square == Square(3, 4)
    assert board.locate("blue-normal-7") is None


# --- UPDATES ---
def test_move_piece() -> None:
    """The piece leaves its square and arrives on the target, with its square updated"""
    board = Board.from_notation(TWO_PIECES)
    moved = board.move_piece(Square(2, 3), Square(3, 2))

    assert board.is_empty(Square(2, 3))
    assert board.piece(Square(3, 2)) == moved
    assert moved.square == Square(3, 2)
    assert moved.id == "red-normal-0"


def test_place_piece_on_occupied_square() -> None:
    board = Board.from_notation(TWO_PIECES)
    intruder = Piece("red-bagel-0", Variant.BAGEL, Color.RED, Square(3, 4))
    with pytest.raises(ContractViolationError):
        board.place_piece(intruder)


def test_place_piece_off_board() -> None:
    board = Board.empty()
    with pytest.raises(ContractViolationError):
        board.place_piece(Piece("red-bagel-0", Variant.BAGEL, Color.RED, OFF_BOARD))


def test_remove_missing_piece() -> None:
    with pytest.raises(PieceNotFoundError):
        Board.empty().remove_piece(Square(4, 4))


def test_replace_piece_must_be_the_same_piece() -> None:
    board = Board.from_notation(TWO_PIECES)
    red = board.piece(Square(2, 3))
    assert red is not None
    board.replace_piece(red.crown())
    crowned = board.piece(Square(2, 3))
    assert crowned is not None and crowned.crowned

    stranger = Piece("red-normal-5", Variant.NORMAL, Color.RED, Square(2, 3))
    with pytest.raises(PieceNotFoundError):
        board.replace_piece(stranger)


def test_copy_is_independent() -> None:
    board = Board.from_notation(TWO_PIECES)
    copied = board.copy()
    copied.remove_piece(Square(3, 4))
    assert board.piece(Square(3, 4)) is not None
    assert copied.piece(Square(3, 4)) is None
