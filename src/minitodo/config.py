"""Configuration models for minitodo."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from minitodo.models import MAX_LENGTH


class TodoConfig(BaseModel):
    """Main configuration for minitodo."""

    data_file: str = ".todos.dat"
    max_todos: int = Field(default=100, ge=1)
    max_length: int = Field(default=MAX_LENGTH, ge=2, le=MAX_LENGTH)
    due_soon_days: int = Field(default=2, ge=0)
    navigation: Literal["raw", "visible"] = "raw"
    log_file: str | None = ".minitodo/minitodo.log"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @classmethod
    def load(cls, path: Path | None = None) -> TodoConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)


def configure_logging(config: TodoConfig) -> logging.Logger:
    """Route the package logger to the configured log file.

    The terminal belongs to curses while the UI runs, so nothing is
    written to stderr. With no log file configured the records are dropped.
    """
    logger = logging.getLogger("minitodo")
    logger.setLevel(config.log_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if config.log_file:
        log_path = Path(config.log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(log_path, delay=True)
        except OSError:
            handler = logging.NullHandler()
    else:
        handler = logging.NullHandler()

    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger


# Default config directory
MINITODO_DIR = Path(".minitodo")
CONFIG_FILE = MINITODO_DIR / "config.json"
