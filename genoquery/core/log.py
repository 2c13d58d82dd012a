"""
Logging setup for genoquery.

Console output goes through Rich; an optional plain-text file handler mirrors
it for long-running servers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

_console = Console(stderr=True)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        log_file: Optional path to also write logs to
    """
    handlers: List[logging.Handler] = [
        RichHandler(
            console=_console,
            rich_tracebacks=True,
            show_path=level.upper() == "DEBUG",
        )
    ]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
