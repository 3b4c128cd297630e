"""
Deck builder: turns a topic-grouped RawTable into a Deck.

Layout of the table:

    topic1,,,topic2,,,...
    word,translation,kanji,word,translation,kanji,...
    <word>,<translation>,<kanji>,<word>,<translation>,<kanji>,...

Row 0 names a topic in the first cell of each three-column block, row 1 is a
column header row and carries no data. Topics may have vocabulary lists of
different lengths, so a row with an empty word cell is skipped for that topic
only.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from vocab_deck.common.errors import FormatError
from vocab_deck.deck_builder.models import (
    Deck,
    Flashcard,
    RawTable,
    SubDeck,
    TopicBlock,
    VocabEntry,
    sub_deck_name,
)

logger = logging.getLogger(__name__)

BLOCK_WIDTH = 3
HEADER_ROWS = 2


def _cell(row: Sequence[str], index: int) -> str:
    # Short rows read as empty cells.
    return row[index].strip() if index < len(row) else ""


def discover_topic_blocks(raw_table: RawTable) -> List[TopicBlock]:
    """Find the topic blocks of a table, left to right.

    A block whose label cell is empty is skipped and scanning continues with
    the next block, so sparse topic rows keep every labelled topic.

    Raises:
        FormatError: If the table has fewer than two rows or row 0 has no
            topic in its first cell
    """
    if len(raw_table) < HEADER_ROWS:
        raise FormatError(
            f"Expected at least {HEADER_ROWS} rows (topic row and column header row), got {len(raw_table)}"
        )

    topic_row = raw_table[0]
    if not _cell(topic_row, 0):
        raise FormatError("No topics found: the first cell of row 0 must hold a topic label")

    width = max(len(row) for row in raw_table)
    blocks: List[TopicBlock] = []
    for start in range(0, width, BLOCK_WIDTH):
        label = _cell(topic_row, start)
        if not label:
            logger.debug("Skipping column block without topic label", extra={"column": start})
            continue
        blocks.append(TopicBlock(label=label, start_column=start))
    return blocks


def collect_entries(raw_table: RawTable, block: TopicBlock) -> List[VocabEntry]:
    """Collect the vocabulary entries of one block, in row order."""
    entries: List[VocabEntry] = []
    start = block.start_column
    for row in raw_table[HEADER_ROWS:]:
        word = _cell(row, start)
        if not word:
            continue
        entries.append(
            VocabEntry(
                word=word,
                translation=_cell(row, start + 1),
                script_form=_cell(row, start + 2),
            )
        )
    return entries


def build(raw_table: RawTable, deck_name: str) -> Deck:
    """Build a Deck with one sub-deck per topic from a RawTable.

    Args:
        raw_table: Parsed CSV rows
        deck_name: Top-level deck name; sub-decks are named '<deck_name>::<topic>'

    Returns:
        Deck whose sub-decks follow the left-to-right order of topics in row 0.
        Blocks sharing a label are merged into the sub-deck of the first one.

    Raises:
        FormatError: If the table does not match the expected template
    """
    deck_name = deck_name.strip()
    if not deck_name:
        raise FormatError("Deck name must not be empty")

    blocks = discover_topic_blocks(raw_table)

    grouped: Dict[str, List[VocabEntry]] = {}
    for block in blocks:
        grouped.setdefault(block.label, []).extend(collect_entries(raw_table, block))

    sub_decks = [
        SubDeck(
            name=sub_deck_name(deck_name, topic),
            topic=topic,
            cards=[Flashcard.from_entry(entry) for entry in entries],
        )
        for topic, entries in grouped.items()
    ]
    deck = Deck(name=deck_name, sub_decks=sub_decks)

    logger.info(
        "Built deck",
        extra={"deck": deck_name, "topics": len(sub_decks), "cards": deck.card_count},
    )
    return deck
