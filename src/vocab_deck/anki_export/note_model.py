"""
Helper functions for the vocabulary note type used by every vocab_deck output.

The note type has Word, Translation and ScriptForm fields and a single card
template showing the word (with its script form when present) on the front
and the translation on the back.
Templates are loaded from external files in the note_templates directory.
"""
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Dict, List

from vocab_deck.deck_builder.models import Flashcard

# Path to templates directory
TEMPLATES_DIR = Path(__file__).parent / "note_templates"

DEFAULT_MODEL_NAME = "Vocabulary (word/translation/script)"
CARD_TEMPLATE_NAME = "word->translation"

# genanki expects ids in this range
_ID_LOW = 1 << 30
_ID_HIGH = 1 << 31


def stable_id(name: str) -> int:
    """Derive a deterministic Anki id from a name."""
    digest = hashlib.sha1(name.encode("utf-8")).digest()
    return _ID_LOW + int.from_bytes(digest[:8], "big") % (_ID_HIGH - _ID_LOW)


def get_note_fields() -> List[str]:
    """Get the list of fields for the vocabulary note type.

    Fields are loaded from fields.txt file.
    """
    fields_file = TEMPLATES_DIR / "fields.txt"
    return [line.strip() for line in fields_file.read_text(encoding="utf-8").splitlines() if line.strip()]


def get_note_css() -> str:
    return (TEMPLATES_DIR / "styles.css").read_text(encoding="utf-8")


def _load_template(filename: str) -> str:
    return (TEMPLATES_DIR / filename).read_text(encoding="utf-8")


def get_card_templates() -> List[Dict[str, str]]:
    """Get the card templates in AnkiConnect's Name/Front/Back form."""
    return [
        {
            "Name": CARD_TEMPLATE_NAME,
            "Front": _load_template("front.html"),
            "Back": _load_template("back.html"),
        },
    ]


def card_fields(card: Flashcard) -> Dict[str, str]:
    """Map a flashcard onto the note type's fields, in field order."""
    return {
        "Word": card.front,
        "Translation": card.back,
        "ScriptForm": card.script_form,
    }


def create_model_payload(model_name: str = DEFAULT_MODEL_NAME) -> Dict[str, Any]:
    """Create the payload for creating the note type via AnkiConnect.

    Returns:
        Dictionary payload for the createModel AnkiConnect action
    """
    return {
        "modelName": model_name,
        "inOrderFields": get_note_fields(),
        "css": get_note_css(),
        "cardTemplates": get_card_templates(),
    }
