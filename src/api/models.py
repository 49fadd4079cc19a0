"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.checkers.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Difficulty, Phase, Variant

PieceColor = str


def _validate_coordinate(value: int, size: int, name: str) -> int:
    if not 0 <= value < size:
        raise InvalidRequestError(f"{name} must lie between 0 and {size - 1}, got {value}.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Two humans by default. With ai_opponent set, missing difficulty/color come from the settings."""

    ai_opponent: bool = False
    ai_difficulty: Optional[Difficulty] = None
    ai_color: Optional[Color] = None


class GameRequest(BaseModel):
    """Any command that only needs to know which game (start, finish draft, reset, AI turn, ...)"""

    game_id: UUID


class GetGameRequest(GameRequest):
    pass


class DeleteGameRequest(GameRequest):
    pass


class SelectionRequest(BaseModel):
    game_id: UUID
    color: Color
    variant: Variant
    delta: int

    @field_validator("delta")
    @classmethod
    def validate_delta(cls, value: int) -> int:
        if value not in (-1, 1):
            raise InvalidRequestError(
                f"A selection changes by one piece at a time (+1 or -1), got {value}."
            )
        return value


class ToggleSelectionRequest(BaseModel):
    """Draft screen click on a variant: adds one, or removes one once no more can be added"""

    game_id: UUID
    color: Color
    variant: Variant


class PlacementRequest(BaseModel):
    game_id: UUID
    piece_id: str
    row: int
    col: int

    @field_validator("row")
    @classmethod
    def validate_row(cls, value: int) -> int:
        return _validate_coordinate(value, BOARD_DIMENSIONS[0], "row")

    @field_validator("col")
    @classmethod
    def validate_col(cls, value: int) -> int:
        return _validate_coordinate(value, BOARD_DIMENSIONS[1], "col")


class LegalMovesRequest(BaseModel):
    game_id: UUID
    row: int
    col: int

    @field_validator("row")
    @classmethod
    def validate_row(cls, value: int) -> int:
        return _validate_coordinate(value, BOARD_DIMENSIONS[0], "row")

    @field_validator("col")
    @classmethod
    def validate_col(cls, value: int) -> int:
        return _validate_coordinate(value, BOARD_DIMENSIONS[1], "col")


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: tuple[int, int]
    to_square: tuple[int, int]
    piece_id: Optional[str] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: tuple[int, int]) -> tuple[int, int]:
        row, col = value
        _validate_coordinate(row, BOARD_DIMENSIONS[0], "row")
        _validate_coordinate(col, BOARD_DIMENSIONS[1], "col")
        return value


class AllMovesRequest(BaseModel):
    game_id: UUID
    color: Color


# --- RESPONSE MODELS ---
class PieceView(BaseModel):
    id: str
    variant: Variant
    color: Color
    row: int
    col: int
    crowned: bool


class MoveView(BaseModel):
    piece_id: str
    color: Color
    from_square: tuple[int, int]
    to_square: tuple[int, int]
    captured_id: Optional[str] = None


class PieceSelectionView(BaseModel):
    variant: Variant
    count: int
    maximum: int
    cost: int


class GameResponse(BaseModel):
    game_id: UUID
    phase: Phase
    active_player: Color
    board: list[PieceView]
    board_notation: str
    scores: dict[PieceColor, int]
    captured: dict[PieceColor, list[PieceView]]
    piece_counts: dict[PieceColor, int]
    move_history: list[MoveView]
    selections: dict[PieceColor, dict[str, int]]
    draft: dict[PieceColor, list[PieceSelectionView]]
    remaining_power: dict[PieceColor, int]
    unplaced: dict[PieceColor, list[PieceView]]
    winner: Optional[Color] = None
    version: int
    ai_difficulty: Optional[Difficulty] = None
    ai_color: Optional[Color] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    piece: PieceView
    destinations: list[tuple[int, int]]


class AllMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    moves: list[MoveView]
