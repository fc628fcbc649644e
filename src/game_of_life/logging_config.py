"""Logging setup shared by the command line tools."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"


def setup_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Configure the root logger: console handler on stderr plus an optional
    file handler. Calling it again replaces the handlers it installed.
    """
    if isinstance(level, str):
        level_name = level.upper()
        numeric_level = logging.getLevelName(level_name)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level}")
    else:
        numeric_level = level

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_game_of_life", False):
            root_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(numeric_level)
        handler._game_of_life = True
        root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # matplotlib and PIL are chatty at DEBUG
    for name in ("matplotlib", "PIL"):
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logging.getLogger("game_of_life")
