"""
Deck builder exports.

Example usage:

from vocab_deck.deck_builder import build, read_table

deck = build(read_table("vocab.csv"), "JP101")
for sub in deck.sub_decks:
    print(sub.name, len(sub.cards))
"""
from .builder import build, collect_entries, discover_topic_blocks
from .models import Deck, Flashcard, RawTable, SubDeck, TopicBlock, VocabEntry
from .table import parse_table, read_table
