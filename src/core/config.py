"""Runtime settings, read from the environment (a .env file is picked up if present)."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from src.core.shared_types import Color, Difficulty

load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///checkers.db"
    log_level: str = "INFO"
    ai_difficulty: Difficulty = Difficulty.EASY
    ai_color: Color = Color.BLUE
    # Fixed seed makes the computer opponent reproducible
    ai_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        seed = os.getenv("CHECKERS_AI_SEED")
        return cls(
            database_url=os.getenv("CHECKERS_DATABASE_URL", cls.database_url),
            log_level=os.getenv("CHECKERS_LOG_LEVEL", cls.log_level).upper(),
            ai_difficulty=Difficulty(
                os.getenv("CHECKERS_AI_DIFFICULTY", cls.ai_difficulty.value).lower()
            ),
            ai_color=Color(os.getenv("CHECKERS_AI_COLOR", cls.ai_color.value).lower()),
            ai_seed=int(seed) if seed else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
