"""Deciding whether the game is over (and who won)"""

from dataclasses import dataclass
from typing import Optional

from src.checkers.board import Board
from src.checkers.moves import History, legal_destinations
from src.core.shared_types import Color


@dataclass(frozen=True)
class WinResult:
    game_over: bool
    winner: Optional[Color] = None


def check_win_condition(
    board: Board, piece_counts: dict[Color, int], history: History = ()
) -> WinResult:
    """
    Pure check of the end condition.
    ----

    1. A player without pieces left has lost (cheap, so checked first).
    2. Scan the board: does each player have at least one piece that can move? Stop as soon as both do.
    3. A player that cannot move has lost.

    NOTE: If neither player can move (possible with immobile variants only), the game ends without a winner.
    """
    for color in Color:
        if piece_counts.get(color, 0) == 0:
            return WinResult(game_over=True, winner=color.opponent)

    can_move = {color: False for color in Color}
    for piece in board.pieces():
        if can_move[piece.color]:
            continue
        if legal_destinations(board, piece, history):
            can_move[piece.color] = True
        if all(can_move.values()):
            return WinResult(game_over=False)

    stuck = [color for color, movable in can_move.items() if not movable]
    if len(stuck) == len(can_move):
        return WinResult(game_over=True, winner=None)
    return WinResult(game_over=True, winner=stuck[0].opponent)
