"""
Pushing a built Deck into a running Anki through AnkiConnect.

Public API:
- AnkiConnectClient(url): thin JSON-over-HTTP client for the AnkiConnect add-on
- sync_deck(deck, client, model_name, tags): create decks and add one note per flashcard

Usage example:

from vocab_deck.anki_sync import AnkiConnectClient, sync_deck

results = sync_deck(deck, AnkiConnectClient("http://127.0.0.1:8765"))
for result in results:
    print(result.topic, result.added, result.errors)

Notes:
- This module uses only stdlib (urllib) to talk to AnkiConnect.
- Notes are added with allowDuplicate, running twice adds every card twice.
"""
from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from vocab_deck.anki_export.note_model import DEFAULT_MODEL_NAME, card_fields, create_model_payload
from vocab_deck.common.errors import AnkiConnectError
from vocab_deck.deck_builder.models import Deck, SubDeck

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6
DEFAULT_ANKI_CONNECT_URL = "http://127.0.0.1:8765"


class AnkiConnectClient:
    def __init__(self, url: str = DEFAULT_ANKI_CONNECT_URL, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout

    def invoke(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        payload: Dict[str, Any] = {
            "action": action,
            "version": ANKI_CONNECT_VERSION,
        }
        if params:
            payload["params"] = params
        data = json.dumps(payload).encode("utf-8")
        req = urllib.request.Request(
            self.url,
            data=data,
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except (urllib.error.URLError, OSError) as e:
            raise AnkiConnectError(f"Could not reach AnkiConnect at {self.url}: {e}") from e

        try:
            parsed = json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise AnkiConnectError(f"AnkiConnect at {self.url} sent a non-JSON response to '{action}': {e}") from e
        if not isinstance(parsed, dict) or "error" not in parsed or "result" not in parsed:
            raise AnkiConnectError(f"Unexpected AnkiConnect response to '{action}': {parsed!r:.200}")
        if parsed.get("error") is not None:
            raise AnkiConnectError(f"AnkiConnect error on action '{action}': {parsed['error']}")
        return parsed.get("result")

    def version(self) -> int:
        return int(self.invoke("version"))

    def create_deck(self, name: str) -> int:
        """Create a deck (no-op if it exists) and return its id."""
        return int(self.invoke("createDeck", {"deck": name}))

    def create_model(self, model_payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a new note type (model) in Anki.

        Args:
            model_payload: Dictionary with modelName, inOrderFields, css, and cardTemplates
        """
        return self.invoke("createModel", model_payload)

    def model_names(self) -> List[str]:
        """Get list of all note type names."""
        return list(self.invoke("modelNames") or [])

    def add_notes(self, notes: Sequence[Mapping[str, Any]]) -> List[int | None]:
        return list(self.invoke("addNotes", {"notes": list(notes)}) or [])

    def can_add_notes_with_error_detail(self, notes: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """Ask Anki why notes could not be added; one {canAdd, error} entry per note."""
        return list(self.invoke("canAddNotesWithErrorDetail", {"notes": list(notes)}) or [])


@dataclass
class ImportResult:
    """Outcome of adding one topic's notes."""
    topic: str
    added: int = 0
    duplicates: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.added + self.duplicates + self.errors


def ensure_note_model(client: AnkiConnectClient, model_name: str = DEFAULT_MODEL_NAME) -> None:
    """Ensure the vocabulary note type exists in Anki.

    Raises:
        AnkiConnectError: If model creation fails
    """
    if model_name in client.model_names():
        return

    try:
        client.create_model(create_model_payload(model_name))
    except AnkiConnectError as e:
        if "already exists" not in str(e).lower():
            raise
    logger.info("Created note type", extra={"model": model_name})


def _note_payload(sub: SubDeck, model_name: str, tags: List[str]) -> List[Dict[str, Any]]:
    return [
        {
            "deckName": sub.name,
            "modelName": model_name,
            "fields": card_fields(card),
            "tags": tags,
            "options": {
                "allowDuplicate": True,
                "duplicateScope": "deck",
            },
        }
        for card in sub.cards
    ]


def import_sub_deck(
    client: AnkiConnectClient,
    sub: SubDeck,
    model_name: str = DEFAULT_MODEL_NAME,
    tags: Iterable[str] = (),
) -> ImportResult:
    """Create a sub-deck and add all of its cards in one addNotes call."""
    result = ImportResult(topic=sub.topic)
    client.create_deck(sub.name)
    if not sub.cards:
        return result

    note_tags = ["_".join(t.split()) for t in [*tags, sub.topic] if t.strip()]
    notes = _note_payload(sub, model_name, note_tags)
    ids = client.add_notes(notes)
    # addNotes answers one id per note; anything missing failed
    ids += [None] * max(0, len(notes) - len(ids))

    failed = [note for note, note_id in zip(notes, ids) if note_id is None]
    result.added = len(notes) - len(failed)
    if failed:
        for detail in client.can_add_notes_with_error_detail(failed):
            if "duplicate" in str(detail.get("error") or "").lower():
                result.duplicates += 1
            else:
                result.errors += 1
        # details missing from the answer count as errors
        result.errors += max(0, len(failed) - result.duplicates - result.errors)
    return result


def sync_deck(
    deck: Deck,
    client: AnkiConnectClient,
    model_name: str = DEFAULT_MODEL_NAME,
    tags: Iterable[str] = (),
) -> List[ImportResult]:
    """Sync a Deck with local Anki via AnkiConnect.

    Creates the top-level deck and one sub-deck per topic, then adds every
    flashcard. No deduplication is done.

    Raises:
        AnkiConnectError: If AnkiConnect is unreachable or rejects a request
    """
    tags = list(tags)
    client.version()
    logger.info("Connected to AnkiConnect", extra={"url": client.url})

    ensure_note_model(client, model_name)
    client.create_deck(deck.name)

    results: List[ImportResult] = []
    for sub in deck.sub_decks:
        result = import_sub_deck(client, sub, model_name=model_name, tags=tags)
        logger.info(
            f"Imported topic: {sub.topic}",
            extra={
                "added": result.added,
                "duplicates": result.duplicates,
                "errors": result.errors,
                "total": result.total,
            },
        )
        results.append(result)
    return results
