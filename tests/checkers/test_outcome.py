"""Unit tests for /src/checkers/outcome.py"""

import pytest

from src.checkers.board import Board
from src.checkers.outcome import WinResult, check_win_condition
from src.core.shared_types import Color


@pytest.mark.parametrize(
    "piece_counts, winner",
    [
        ({Color.RED: 0, Color.BLUE: 3}, Color.BLUE),
        ({Color.RED: 5, Color.BLUE: 0}, Color.RED),
    ],
)
def test_player_without_pieces_loses(
    piece_counts: dict[Color, int], winner: Color
) -> None:
    board = Board.from_notation("8/8/3N4/8/8/4n3/8/8")
    assert check_win_condition(board, piece_counts) == WinResult(True, winner)


def test_game_goes_on_while_both_players_can_move() -> None:
    board = Board.from_notation("8/8/3N4/8/8/4n3/8/8")
    result = check_win_condition(board, {Color.RED: 1, Color.BLUE: 1})
    assert result == WinResult(game_over=False)
    assert result.winner is None


def test_immobilized_player_loses() -> None:
    """Blue only holds a bomb: it still has a piece, but cannot move"""
    board = Board.from_notation("8/8/3N4/8/8/4x3/8/8")
    result = check_win_condition(board, {Color.RED: 1, Color.BLUE: 1})
    assert result == WinResult(game_over=True, winner=Color.RED)


def test_blocked_pieces_count_as_immobilized() -> None:
    """Red's last piece on the far rank has nowhere to go"""
    board = Board.from_notation("8/8/8/8/4n3/8/8/N7")
    result = check_win_condition(board, {Color.RED: 1, Color.BLUE: 1})
    assert result == WinResult(game_over=True, winner=Color.BLUE)


def test_nobody_can_move_is_a_draw() -> None:
    board = Board.from_notation("8/8/3V4/8/8/4f3/8/8")
    result = check_win_condition(board, {Color.RED: 1, Color.BLUE: 1})
    assert result == WinResult(game_over=True, winner=None)
