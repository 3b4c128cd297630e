"""
Error taxonomy for vocab_deck.

Every error the command line reports to the user derives from VocabDeckError.
"""
from __future__ import annotations

EXPECTED_TEMPLATE = (
    "Expected template:\n"
    "  row 0: topic1,,,topic2,,,...\n"
    "  row 1: word,translation,kanji,word,translation,kanji,...\n"
    "  row N: <word>,<translation>,<kanji>,..."
)


class VocabDeckError(Exception):
    """Base class for all errors raised by vocab_deck."""


class FileError(VocabDeckError):
    """Input file missing or unreadable, or output path unwritable."""


class FormatError(VocabDeckError):
    """CSV structure does not match the topic/word/translation/kanji template."""

    def __init__(self, message: str) -> None:
        super().__init__(f"{message}\n{EXPECTED_TEMPLATE}")
        self.reason = message


class ConfigError(VocabDeckError):
    """Configuration file could not be read or failed validation."""


class AnkiConnectError(VocabDeckError):
    """AnkiConnect is unreachable or answered with an error."""
