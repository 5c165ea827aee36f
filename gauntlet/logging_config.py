"""Centralized logging configuration for the Gauntlet builder.

League tasks run on worker threads, so each record carries the league being
processed (``-`` outside a league task) through ``LeagueContextFilter``.
"""

import contextvars
import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

_current_league: contextvars.ContextVar[str] = contextvars.ContextVar('current_league', default='-')


@contextmanager
def league_context(label: str) -> Iterator[None]:
    """Tag every record logged inside the block with a league label."""
    token = _current_league.set(label)
    try:
        yield
    finally:
        _current_league.reset(token)


class LeagueContextFilter(logging.Filter):
    """Adds ``record.league`` from the active league context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.league = _current_league.get()
        return True


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``gauntlet`` logger tree for a build run.

    The file handler gets a timestamped, league-tagged line per record; the
    console gets level, league and message only.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Whether to log to a file
        log_to_console: Whether to log to stdout

    Returns:
        The configured ``gauntlet`` logger
    """
    logger = logging.getLogger('gauntlet')
    logger.setLevel(level)
    logger.handlers = []

    handlers: list[tuple[logging.Handler, logging.Formatter]] = []

    if log_to_file:
        log_dir = log_dir or Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'gauntlet_leg3_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        handlers.append((
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.Formatter(
                '%(asctime)s %(levelname)-7s %(name)s [%(threadName)s] [%(league)s] %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S',
            ),
        ))

    if log_to_console:
        handlers.append((
            logging.StreamHandler(sys.stdout),
            logging.Formatter('%(levelname)s [%(league)s] %(message)s'),
        ))

    for handler, formatter in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(LeagueContextFilter())
        logger.addHandler(handler)

    return logger
