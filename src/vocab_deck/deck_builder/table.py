"""
Reading topic-grouped vocabulary CSV files into a RawTable.

Cells are trimmed of surrounding whitespace and lines without any cells are
dropped; no other interpretation happens here.
"""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path

from vocab_deck.common.errors import FileError, FormatError
from vocab_deck.deck_builder.models import RawTable

logger = logging.getLogger(__name__)


def parse_table(text: str) -> RawTable:
    """Parse CSV text into rows of trimmed cells.

    Raises:
        FormatError: If the text is not parseable CSV
    """
    reader = csv.reader(io.StringIO(text))
    try:
        return [[cell.strip() for cell in row] for row in reader if row]
    except csv.Error as e:
        raise FormatError(f"Could not parse CSV at line {reader.line_num}: {e}") from e


def read_table(path: str | Path) -> RawTable:
    """Read a CSV file into a RawTable.

    Args:
        path: Path to the CSV file (UTF-8, optionally with a BOM)

    Raises:
        FileError: If the file is missing, unreadable or not valid UTF-8
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise FileError(f"Input file does not exist or is not a file: {csv_path}")

    try:
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as handle:
            text = handle.read()
    except UnicodeDecodeError as e:
        raise FileError(f"Input file is not valid UTF-8: {csv_path} ({e})") from e
    except OSError as e:
        raise FileError(f"Could not read input file {csv_path}: {e}") from e

    table = parse_table(text)
    logger.debug("Read CSV table", extra={"file": str(csv_path), "rows": len(table)})
    return table
