"""
Logging setup for notion-translator.

Usage:
    from notion_translator.utils.logger import get_logger, setup_logging

    logger = get_logger(__name__)
    logger.info("Fetching page...")

    setup_logging(level="DEBUG", log_file="translate.log")
"""
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional, Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ROOT_LOGGER = "notion_translator"

# Color codes for terminal output
COLORS = {
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
    'RESET': '\033[0m',
    'DIM': '\033[2m',
}

SUPPORTS_COLOR = hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()


class ColoredFormatter(logging.Formatter):
    """Formatter with colored output for terminal."""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and SUPPORTS_COLOR

    def format(self, record: logging.LogRecord) -> str:
        if self.use_color:
            color = COLORS.get(record.levelname, COLORS['RESET'])
            reset = COLORS['RESET']
            dim = COLORS['DIM']
        else:
            color = reset = dim = ""

        name = record.name
        if name.startswith(ROOT_LOGGER + '.'):
            name = name[len(ROOT_LOGGER) + 1:]

        timestamp = datetime.now().strftime("%H:%M:%S")

        # Format: HH:MM:SS [LEVEL] module: message
        formatted = f"{dim}{timestamp}{reset} {color}[{record.levelname:7}]{reset} {name}: {record.getMessage()}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted


class FileFormatter(logging.Formatter):
    """Formatter for file output (no colors, full timestamps)."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)-7s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


_loggers: dict = {}
_configured = False
_log_level = logging.INFO


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Optional[str] = None,
    quiet: bool = False
) -> None:
    """
    Setup logging for the whole package.

    Console output goes to stderr so it does not interleave with the
    progress bar and the final page URL on stdout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        quiet: Suppress console output
    """
    global _configured, _log_level

    _log_level = getattr(logging, level.upper())

    root = logging.getLogger(ROOT_LOGGER)
    # The file handler records everything, so the logger must let DEBUG through
    root.setLevel(logging.DEBUG if log_file else _log_level)
    root.handlers.clear()
    root.propagate = False

    if not quiet:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(_log_level)
        console.setFormatter(ColoredFormatter())
        root.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always debug for file
        file_handler.setFormatter(FileFormatter())
        root.addHandler(file_handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the package namespace.

    Args:
        name: Logger name (usually __name__)
    """
    if not _configured:
        setup_logging()

    if not name.startswith(ROOT_LOGGER):
        if name.startswith('__'):
            name = ROOT_LOGGER
        else:
            name = f'{ROOT_LOGGER}.{name}'

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def set_level(level: LogLevel) -> None:
    """Change log level at runtime."""
    global _log_level
    _log_level = getattr(logging, level.upper())
    root = logging.getLogger(ROOT_LOGGER)
    has_file = any(isinstance(h, logging.FileHandler) for h in root.handlers)
    root.setLevel(logging.DEBUG if has_file else _log_level)
    for handler in root.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(_log_level)
