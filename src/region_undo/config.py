"""Runtime settings read from the environment."""

import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from region_undo.vcs.git_client import DEFAULT_GIT_BINARY

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """Settings for the region-undo command line tool."""

    model_config = ConfigDict(frozen=True)

    git_binary: str = DEFAULT_GIT_BINARY
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_settings() -> Settings:
    """Build Settings from ``REGION_UNDO_*`` variables and the working directory's .env."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        git_binary=os.getenv("REGION_UNDO_GIT_BINARY", DEFAULT_GIT_BINARY),
        log_level=os.getenv("REGION_UNDO_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_format=os.getenv("REGION_UNDO_LOG_FORMAT", DEFAULT_LOG_FORMAT),
    )


def configure_logging(settings: Settings, verbose: bool = False) -> None:
    """Configure root logging for command line use."""
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format=settings.log_format)
