"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# rows x columns. Red starts on rows 0-2, blue on rows 5-7
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """Only the dark squares are playable: (row + col) is odd"""
        return (self.row + self.col) % 2 == 1

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def midpoint(self, other: Square) -> Square:
        """Square halfway towards `other`. Only meaningful for jumps (even distances)."""
        return Square((self.row + other.row) // 2, (self.col + other.col) // 2)

    def to_tuple(self) -> tuple[int, int]:
        return (self.row, self.col)


def all_squares() -> list[Square]:
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]


def dark_squares() -> list[Square]:
    return [square for square in all_squares() if square.is_dark()]


# Where a drafted piece "stands" before it has been placed
OFF_BOARD = Square(-1, -1)
