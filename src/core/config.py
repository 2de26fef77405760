"""
Settings shared by the persistence and service layers.

Values come from environment variables (prefixed CHESSBASE_) and are validated by pydantic.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

from src.board.fen import NEW_GAME

ENV_PREFIX = "CHESSBASE_"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    database_url: str = "sqlite:///chessbase.db"
    echo_sql: bool = False
    log_level: str = "INFO"
    default_fen: str = NEW_GAME

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Pick up every field that has a matching CHESSBASE_<FIELD> variable set"""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
