"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> "Color":
        return Color.BLUE if self == Color.RED else Color.RED


class Variant(StrEnum):
    NORMAL = "normal"
    BAGEL = "bagel"
    PANCAKE = "pancake"
    BOMB = "bomb"
    VINYL = "vinyl"
    FLYING_DISK = "flying disk"


class Phase(StrEnum):
    MENU = "menu"
    DRAFT = "draft"
    PLACEMENT = "placement"
    PLAY = "play"
    GAME_OVER = "game over"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
