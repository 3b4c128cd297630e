"""
Logging configuration for vocab_deck.

Human-readable lines on stderr with structured context fields appended.
"""
import logging
import sys
from typing import Optional, TextIO

# Attributes every LogRecord carries; anything else came in through extra={...}
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()) | {
    "message",
    "asctime",
}


class ContextFormatter(logging.Formatter):
    """Formatter that appends extra context fields to log messages.

    Format: timestamp [LEVEL] logger_name: message | key1=value1 key2=value2
    Level names and context are coloured only when use_color is set.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m',
        'GRAY': '\033[90m',
    }

    def __init__(self, fmt: str, datefmt: str, use_color: bool = False) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def _paint(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)

        levelname = record.levelname
        if levelname in self.COLORS:
            base_msg = base_msg.replace(f"[{levelname}]", self._paint(f"[{levelname}]", levelname), 1)

        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and value is not None
        ]
        if extra_fields:
            return f"{base_msg}{self._paint(' | ' + ' '.join(extra_fields), 'GRAY')}"
        return base_msg


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """Configure logging for the vocab_deck namespace.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               DEBUG also reports skipped column blocks and table sizes.
        stream: Where log lines go, stderr by default so stdout stays free
               for the summary

    Example:
        >>> from vocab_deck.common.logging_config import setup_logging
        >>> setup_logging("DEBUG")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream if stream is not None else sys.stderr

    formatter = ContextFormatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_color=hasattr(stream, "isatty") and stream.isatty(),
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger('vocab_deck')
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False

