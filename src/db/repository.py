"""Where the service keeps its checkers games: any storage offering these four calls will do."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Storage of GameModel records, keyed by game ID"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Stored game with this ID, or None."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new game. Returns what was stored and its new ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored game with its next version. None when the ID is unknown."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the game. Returns the removed game, or None when the ID is unknown."""
        ...
