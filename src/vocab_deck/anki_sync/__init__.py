"""AnkiConnect sync exports.

Optional alternative to writing an .apkg file: adds the notes of a built Deck
straight into a running Anki that has the AnkiConnect add-on enabled.
"""
from .anki_connect import (
    DEFAULT_ANKI_CONNECT_URL,
    AnkiConnectClient,
    ImportResult,
    ensure_note_model,
    import_sub_deck,
    sync_deck,
)
