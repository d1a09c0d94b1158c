"""Logging configuration for git-prune-branches

Only the package logger is configured; the root logger and GitPython's
``git`` loggers are left alone.
"""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "git_prune_branches"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ShortNameFilter(logging.Filter):
    """Add ``short_name``: the logger name without the package prefix."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = PACKAGE_LOGGER + "."
        name = record.name
        if name.startswith(prefix):
            name = name[len(prefix):]
        record.short_name = name
        return True


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / ".git-prune-branches" / "git-prune-branches.log"


def _close_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Configure logging for the application.

    Log records go to stderr through rich, keeping them apart from the
    branch tables and prompts on stdout.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages with time and source, and
            write everything to the log file

    Returns:
        The configured package logger
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    _close_handlers(logger)

    console_handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
    )
    console_handler.addFilter(ShortNameFilter())
    console_handler.setFormatter(logging.Formatter("[%(short_name)s] %(message)s"))
    logger.addHandler(console_handler)

    if debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger under the package logger, so ``setup_logging`` applies to it
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
