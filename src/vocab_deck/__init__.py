"""vocab_deck package.

Converts a CSV of vocabulary grouped by topic into an Anki deck:
- deck_builder: CSV reading and the topic/entry grouping into a Deck
- anki_export: the note type and .apkg writing
- anki_sync: optional push into a running Anki through AnkiConnect
"""
from vocab_deck.deck_builder import Deck, build, read_table
