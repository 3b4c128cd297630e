from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from vocab_deck.anki_export.apkg import write_package
from vocab_deck.anki_sync.anki_connect import AnkiConnectClient, sync_deck
from vocab_deck.common.errors import VocabDeckError
from vocab_deck.common.logging_config import setup_logging
from vocab_deck.config_models import RunConfig, load_config
from vocab_deck.deck_builder.builder import build
from vocab_deck.deck_builder.models import Deck
from vocab_deck.deck_builder.table import read_table

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path, cfg: RunConfig) -> Path:
    directory = cfg.output_dir if cfg.output_dir is not None else input_path.parent
    return directory / f"{input_path.stem}.apkg"


def print_summary(deck: Deck) -> None:
    print(f"Deck: {deck.name}")
    for sub in deck.sub_decks:
        print(f"  {sub.name}: {len(sub.cards)} cards")
    print(f"Total: {deck.card_count} cards in {len(deck.sub_decks)} topics")


def run(
    input_csv: Path,
    deck_name: str,
    output: Optional[Path] = None,
    config_path: Optional[Path] = None,
    sync: bool = False,
    anki_connect_url: Optional[str] = None,
) -> Deck:
    """Convert a topic-grouped vocabulary CSV into an Anki deck.

    Writes an .apkg package and, with sync, also adds the notes to a running
    Anki through AnkiConnect.

    Raises:
        VocabDeckError: On unreadable input, malformed CSV, bad config,
            unwritable output or AnkiConnect failures
    """
    cfg = load_config(config_path)
    logger.info("Reading vocabulary", extra={"file": str(input_csv), "deck": deck_name})

    deck = build(read_table(input_csv), deck_name)

    target = output if output is not None else default_output_path(input_csv, cfg)
    write_package(deck, target, model_name=cfg.model_name, tags=cfg.tags)
    print_summary(deck)
    print(f"Package saved to: {target}")

    if sync:
        client = AnkiConnectClient(anki_connect_url or cfg.anki_connect_url)
        results = sync_deck(deck, client, model_name=cfg.model_name, tags=cfg.tags)
        added = sum(r.added for r in results)
        errors = sum(r.errors for r in results)
        print(f"Sync complete: {added} added, {errors} failures")

    return deck


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocab-deck",
        description="Convert a topic-grouped vocabulary CSV into an Anki deck",
    )
    parser.add_argument("input_csv", type=Path, help="Path to the vocabulary CSV file")
    parser.add_argument("deck_name", help="Top-level deck name; topics become '<deck_name>::<topic>'")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Path of the .apkg to write (defaults to <input stem>.apkg)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML config (output_dir, tags, anki_connect_url, model_name)",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Also add the notes to a running Anki through AnkiConnect",
    )
    parser.add_argument(
        "--anki-connect-url",
        default=None,
        help="AnkiConnect URL (overrides config and ANKI_CONNECT_URL)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        run(
            input_csv=args.input_csv,
            deck_name=args.deck_name,
            output=args.output,
            config_path=args.config,
            sync=args.sync,
            anki_connect_url=args.anki_connect_url,
        )
    except VocabDeckError as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
