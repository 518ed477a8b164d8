"""Configuration: .env loading and parser settings."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict

ENV_PREFIX = "CHESS_NOTATION_"

# Track whether environment has been loaded
_ENV_LOADED = False


def load_env(filename: str | None = None, override: bool = False) -> Path | None:
    """Load environment variables from .env file.

    Once loaded, subsequent calls are skipped unless override=True.
    Tests should use override=True to reload different configs.

    Args:
        filename: Optional .env filename. Defaults to ENV_FILE env var or '.env'.
        override: Whether to override existing environment variables.

    Returns:
        Path to the .env file that was loaded, or None if not found.
    """
    global _ENV_LOADED

    if _ENV_LOADED and not override:
        return None

    env_file = filename or os.environ.get("ENV_FILE", ".env")
    dotenv_path = find_dotenv(env_file, usecwd=True)

    if dotenv_path:
        load_dotenv(dotenv_path, override=override)
        _ENV_LOADED = True
        logger.debug(f"Loaded environment from: {dotenv_path}")
        return Path(dotenv_path)
    else:
        logger.debug(f"No .env file found: {env_file}")
        return None


class ParserSettings(BaseModel):
    """Options that change what the grammars accept.

    The defaults follow the canonical notations. Parsing never reads the
    environment on its own; use :meth:`from_env` to opt in.
    """

    # Castling rights must be written in KQkq order
    strict_castling_order: bool = True
    # Accept a full-move counter of 0 in board notation
    allow_zero_fullmove: bool = False
    # Accept 0-0 / 0-0-0 as castling tokens
    accept_zero_castling: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_env(cls) -> "ParserSettings":
        """Build settings from ``CHESS_NOTATION_*`` environment variables.

        Loads the .env file first (once per process). Unset variables keep
        their defaults; values are coerced by pydantic ("true", "0", "yes"...).
        """
        load_env()
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        settings = cls(**values)
        logger.debug(f"Parser settings from environment: {settings}")
        return settings
