"""
Logging setup for pylibconfig.

Modules log through children of the "pylibconfig" logger:

    logger = get_logger("parser")    # -> "pylibconfig.parser"

Importing the package installs no handlers. The command-line checker (or an
application that wants the library's messages on its console) calls
setup_logging() once.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path


PACKAGE_LOGGER = "pylibconfig"


class Colors:
    """ANSI escape sequences used on color terminals."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BRIGHT_RED = "\033[91m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.DIM + Colors.CYAN,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.BOLD + Colors.BRIGHT_RED,
}

# Keyed by the last part of the logger name
COMPONENT_COLORS = {
    "lexer": Colors.CYAN,
    "parser": Colors.MAGENTA,
    "loader": Colors.BLUE,
    "main": Colors.GREEN,
}

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class PlainFormatter(logging.Formatter):
    """Formatter with a fixed-width level name, used for log files."""

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{record.levelname:8}"
        return super().format(record)


class ColoredFormatter(PlainFormatter):
    """
    Console formatter that colors the level, the component and the text of
    warnings and errors.

    The record handed to other handlers is left untouched.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{LEVEL_COLORS.get(record.levelno, '')}{record.levelname:8}{Colors.RESET}"

        component_color = COMPONENT_COLORS.get(record.name.rsplit(".", 1)[-1])
        if component_color:
            record.name = f"{component_color}{record.name}{Colors.RESET}"

        if record.levelno >= logging.ERROR:
            record.msg = f"{Colors.RED}{record.getMessage()}{Colors.RESET}"
            record.args = None
        elif record.levelno >= logging.WARNING:
            record.msg = f"{Colors.YELLOW}{record.getMessage()}{Colors.RESET}"
            record.args = None

        # Level name is already padded
        return logging.Formatter.format(self, record)


@dataclass
class LogConfig:
    """Where the package's log records go and at which levels."""

    console_level: str = "WARNING"
    console_colors: bool = True

    # None disables the file handler
    file_path: str | None = None
    file_level: str = "DEBUG"
    file_max_bytes: int = 1024 * 1024
    file_backup_count: int = 3

    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


def get_log_level(level_str: str) -> int:
    """Convert a level name such as "debug" to its logging constant (INFO if unknown)."""
    return LOG_LEVELS.get(level_str.lower(), logging.INFO)


def setup_logging(config: LogConfig | None = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        config: Logging configuration (defaults if None)

    Returns:
        The "pylibconfig" logger
    """
    config = config or LogConfig()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)  # handlers filter
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()

    # stderr keeps stdout free for the values the checker prints
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(get_log_level(config.console_level))
    console.setFormatter(
        ColoredFormatter(
            fmt=config.format,
            datefmt=config.date_format,
            use_colors=config.console_colors and sys.stderr.isatty(),
        )
    )
    package_logger.addHandler(console)

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(get_log_level(config.file_level))
        file_handler.setFormatter(PlainFormatter(fmt=config.format, datefmt=config.date_format))
        package_logger.addHandler(file_handler)

    return package_logger


def setup_logging_from_args(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
    colors: bool = True,
) -> LogConfig:
    """
    Build a LogConfig from the checker's command-line flags and apply it.

    --debug wins over --verbose, which wins over --quiet; with none of them
    only warnings and errors reach the console.

    Returns:
        The LogConfig that was applied
    """
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = "WARNING"

    config = LogConfig(console_level=level, console_colors=colors, file_path=log_file)
    setup_logging(config)
    return config


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a package component ("parser" -> "pylibconfig.parser")."""
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
