"""Engine and server configuration.

Values come from ``CHECKERS_*`` environment variables or a
``.env.checkers`` file. All fields have defaults, so an empty environment
gives the standard game: Black starts on squares 1-12 and moves first.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .pieces import Color


class GameSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKERS_", env_file=".env.checkers", env_file_encoding="utf-8",
    )

    # Rules
    first_color: Color = Color.BLACK
    top_color: Color = Color.BLACK
    blocked_player_loses: bool = True

    # Runtime
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
