"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PieceColor = str
VariantName = str
PieceRecord = dict[str, Any]
MoveRecord = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, DB, and Game layers."""

    phase: str
    active_player: PieceColor
    board: list[PieceRecord]
    scores: dict[PieceColor, int]
    captured: dict[PieceColor, list[PieceRecord]]
    piece_counts: dict[PieceColor, int]
    move_history: list[MoveRecord]
    selections: dict[PieceColor, dict[VariantName, int]]
    rosters: dict[PieceColor, list[PieceRecord]]
    active: bool = False
    winner: Optional[PieceColor] = None
    version: int = 0
    ai_difficulty: Optional[str] = None
    ai_color: Optional[PieceColor] = None
