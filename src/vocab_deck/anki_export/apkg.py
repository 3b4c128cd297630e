"""
Writing a Deck to an Anki package (.apkg) with genanki.

Each sub-deck becomes its own genanki deck named '<deck>::<topic>', which Anki
nests under the top-level deck on import. Model and deck ids are derived from
names so re-importing an updated file lands in the same decks.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

import genanki

from vocab_deck.anki_export.note_model import (
    CARD_TEMPLATE_NAME,
    DEFAULT_MODEL_NAME,
    card_fields,
    get_card_templates,
    get_note_css,
    get_note_fields,
    stable_id,
)
from vocab_deck.common.errors import FileError
from vocab_deck.deck_builder.models import Deck

logger = logging.getLogger(__name__)

DEFAULT_TAG = "vocab_deck"


def _tag(value: str) -> str:
    # Anki tags cannot contain whitespace
    return "_".join(value.split())


def build_model(model_name: str = DEFAULT_MODEL_NAME) -> genanki.Model:
    template = get_card_templates()[0]
    return genanki.Model(
        stable_id(f"model:{model_name}"),
        model_name,
        fields=[{"name": name} for name in get_note_fields()],
        templates=[
            {
                "name": CARD_TEMPLATE_NAME,
                "qfmt": template["Front"],
                "afmt": template["Back"],
            },
        ],
        css=get_note_css(),
    )


def build_genanki_decks(
    deck: Deck,
    model_name: str = DEFAULT_MODEL_NAME,
    tags: Iterable[str] = (),
) -> List[genanki.Deck]:
    """Convert a Deck into genanki decks: the top-level deck followed by one per topic."""
    model = build_model(model_name)
    extra_tags = [_tag(t) for t in tags if t.strip()]

    decks = [genanki.Deck(stable_id(f"deck:{deck.name}"), deck.name)]
    for sub in deck.sub_decks:
        anki_deck = genanki.Deck(stable_id(f"deck:{sub.name}"), sub.name)
        note_tags = [DEFAULT_TAG, *extra_tags, _tag(sub.topic)]
        for position, card in enumerate(sub.cards):
            fields = card_fields(card)
            anki_deck.add_note(
                genanki.Note(
                    model=model,
                    fields=list(fields.values()),
                    tags=note_tags,
                    # Position keeps identical cards distinct: no deduplication.
                    guid=genanki.guid_for(sub.name, position, card.front, card.back),
                )
            )
        decks.append(anki_deck)
    return decks


def write_package(
    deck: Deck,
    output_path: str | Path,
    model_name: str = DEFAULT_MODEL_NAME,
    tags: Iterable[str] = (),
    timestamp: Optional[float] = None,
) -> Path:
    """Write a Deck to an .apkg file.

    The package is written to a temporary file in the target directory and
    moved into place only once complete. Passing a timestamp pins the
    note and card modification times stored in the collection, otherwise
    the current time is used. The zip entry times genanki writes are always
    the current time, so two packages are not byte-identical; the Deck value,
    note GUIDs and deck and model ids are what stays reproducible.

    Raises:
        FileError: If the output location cannot be written
    """
    target = Path(output_path)
    decks = build_genanki_decks(deck, model_name=model_name, tags=tags)
    package = genanki.Package(decks)

    tmp_name: Optional[str] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=".apkg", dir=target.parent)
        os.close(fd)
        package.write_to_file(tmp_name, timestamp=timestamp)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as e:
        raise FileError(f"Could not write output file {target}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    logger.info(
        "Wrote Anki package",
        extra={"file": str(target), "decks": len(decks), "cards": deck.card_count},
    )
    return target
