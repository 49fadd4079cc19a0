"""
Computer opponent.

Three difficulty levels share one contract:
* choose_move: a move taken from the move generator for the AI's own pieces (None if there is nothing to do)
* choose_draft: how many pieces of each variant to bring
* choose_placement: which square each drafted piece goes to

The AI never changes the game itself. Its choices are fed back through the same Game commands a human uses.
"""

import random
from typing import Optional, Sequence

from loguru import logger

from src.checkers.draft import Selection, empty_selection, placement_squares
from src.checkers.game import GameState
from src.checkers.moves import Move, generate_moves
from src.checkers.pieces import Piece, crowning_row, forward_direction, home_rows
from src.checkers.square import Square
from src.core.shared_types import Color, Difficulty, Phase, Variant

CENTER_COLUMNS = range(2, 6)
EDGE_COLUMNS = (0, 1, 6, 7)


class AIPlayer:
    """Base computer opponent: random moves, valuable pieces placed in the center."""

    difficulty: Difficulty = Difficulty.EASY
    draft: Selection = {}

    def __init__(
        self, color: Color = Color.BLUE, rng: Optional[random.Random] = None
    ) -> None:
        self.color = color
        self.rng = rng if rng is not None else random.Random()

    # --- Public API ---
    def choose_move(self, state: GameState) -> Optional[Move]:
        """None when it is not our turn, or when none of our pieces can move"""
        if state.phase != Phase.PLAY or state.active_player != self.color:
            return None

        moves = generate_moves(state.board, self.color, state.history)
        if not moves:
            return None

        move = self._select_move(moves, state)
        logger.debug(
            f"{self.difficulty.value} AI plays {move.piece.id} {move.from_square} -> {move.to_square}"
        )
        return move

    def choose_draft(self, state: GameState) -> Selection:
        return {**empty_selection(), **self.draft}

    def choose_placement(
        self, state: GameState, roster: Sequence[Piece]
    ) -> dict[str, Square]:
        """Most valuable pieces first, onto the center columns; the edges once the center is full."""
        squares = self._available_squares(state)
        center = [square for square in squares if square.col in CENTER_COLUMNS]
        edges = [square for square in squares if square.col in EDGE_COLUMNS]
        free = center + edges

        pieces = sorted(
            (piece for piece in roster if piece.color == self.color),
            key=lambda piece: piece.value,
            reverse=True,
        )
        return {piece.id: square for piece, square in zip(pieces, free)}

    # --- Internal helpers ---
    def _select_move(self, moves: list[Move], state: GameState) -> Move:
        return self.rng.choice(moves)

    def _available_squares(self, state: GameState) -> list[Square]:
        return [
            square
            for square in placement_squares(self.color)
            if state.board.is_empty(square)
        ]


class EasyAI(AIPlayer):
    """Plays any legal move at random"""

    difficulty = Difficulty.EASY
    draft = {Variant.NORMAL: 8, Variant.BAGEL: 2, Variant.PANCAKE: 2}


class MediumAI(AIPlayer):
    """Takes a piece whenever it can, otherwise random"""

    difficulty = Difficulty.MEDIUM
    draft = {
        Variant.NORMAL: 6,
        Variant.BAGEL: 2,
        Variant.VINYL: 1,
        Variant.BOMB: 1,
        Variant.PANCAKE: 2,
    }

    def _select_move(self, moves: list[Move], state: GameState) -> Move:
        captures = [move for move in moves if move.is_capture]
        return self.rng.choice(captures or moves)


class HardAI(AIPlayer):
    """
    Priorities:
    1. capture, with the cheapest piece that can
    2. advance an uncrowned piece: onto the crowning rank, else into the center columns, else anywhere forward
    3. anything
    """

    difficulty = Difficulty.HARD
    draft = {
        Variant.NORMAL: 5,
        Variant.BAGEL: 1,
        Variant.VINYL: 1,
        Variant.BOMB: 1,
        Variant.PANCAKE: 2,
        Variant.FLYING_DISK: 2,
    }

    def _select_move(self, moves: list[Move], state: GameState) -> Move:
        captures = [move for move in moves if move.is_capture]
        if captures:
            cheapest = min(move.piece.value for move in captures)
            return self.rng.choice(
                [move for move in captures if move.piece.value == cheapest]
            )

        forward = forward_direction(self.color)
        advancing = [
            move
            for move in moves
            if not move.piece.crowned
            and (move.to_square.row - move.from_square.row) * forward > 0
        ]
        crowning = [
            move for move in advancing if move.to_square.row == crowning_row(self.color)
        ]
        central = [move for move in advancing if move.to_square.col in CENTER_COLUMNS]
        for preferred in (crowning, central, advancing):
            if preferred:
                return self.rng.choice(preferred)
        return self.rng.choice(moves)

    def choose_placement(
        self, state: GameState, roster: Sequence[Piece]
    ) -> dict[str, Square]:
        """
        Deterministic, by variant:
        flying disks on the back rank, pancakes in the center, bombs on the front rank,
        vinyl on the edges, bagels center, normal pieces wherever is left.
        A piece whose preferred squares are taken goes to the first free square. Every square is handed out once.
        """
        squares = self._available_squares(state)
        rows = home_rows(self.color)
        back_row = rows[-1] if self.color == Color.BLUE else rows[0]
        front_row = rows[0] if self.color == Color.BLUE else rows[-1]

        back_rank = [square for square in squares if square.row == back_row]
        front_rank = [square for square in squares if square.row == front_row]
        center = [square for square in squares if square.col in CENTER_COLUMNS]
        edges = [square for square in squares if square.col in EDGE_COLUMNS]

        preferences: list[tuple[Variant, list[list[Square]]]] = [
            (Variant.FLYING_DISK, [back_rank, squares]),
            (Variant.PANCAKE, [center, squares]),
            (Variant.BOMB, [front_rank, squares]),
            (Variant.VINYL, [edges, squares]),
            (Variant.BAGEL, [center, squares]),
            (Variant.NORMAL, [squares]),
        ]

        used: set[Square] = set()
        decisions: dict[str, Square] = {}
        own_pieces = [piece for piece in roster if piece.color == self.color]
        for variant, pools in preferences:
            for piece in (p for p in own_pieces if p.variant == variant):
                square = self._next_free(pools, used)
                if square is None:
                    continue
                decisions[piece.id] = square
                used.add(square)
        return decisions

    @staticmethod
    def _next_free(pools: list[list[Square]], used: set[Square]) -> Optional[Square]:
        for pool in pools:
            for square in pool:
                if square not in used:
                    return square
        return None


# Centralized mapping of difficulty to AI class
AI_PLAYERS: dict[Difficulty, type[AIPlayer]] = {
    Difficulty.EASY: EasyAI,
    Difficulty.MEDIUM: MediumAI,
    Difficulty.HARD: HardAI,
}


def create_ai(
    difficulty: Difficulty, color: Color = Color.BLUE, seed: Optional[int] = None
) -> AIPlayer:
    """Create the computer opponent for a difficulty. A seed makes its choices reproducible."""
    return AI_PLAYERS[difficulty](color, random.Random(seed))
