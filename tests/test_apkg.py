import sqlite3
import zipfile
from contextlib import closing

import pytest

import vocab_deck.anki_export.apkg as apkg
from vocab_deck.anki_export.note_model import DEFAULT_MODEL_NAME, create_model_payload, get_note_fields, stable_id
from vocab_deck.common.errors import FileError
from vocab_deck.deck_builder.builder import build


def test_build_genanki_decks_structure(jp101_rows):
    deck = build(jp101_rows, "JP101")
    decks = apkg.build_genanki_decks(deck)

    assert [d.name for d in decks] == ["JP101", "JP101::Greetings", "JP101::Numbers"]
    assert [len(d.notes) for d in decks] == [0, 1, 2]

    note = decks[1].notes[0]
    assert note.fields == ["hello", "konnichiwa", "こんにちは"]
    assert note.tags == ["vocab_deck", "Greetings"]


def test_ids_and_guids_are_stable(jp101_rows):
    first = apkg.build_genanki_decks(build(jp101_rows, "JP101"))
    second = apkg.build_genanki_decks(build(jp101_rows, "JP101"))

    assert [d.deck_id for d in first] == [d.deck_id for d in second]
    assert [n.guid for d in first for n in d.notes] == [n.guid for d in second for n in d.notes]
    assert first[0].deck_id == stable_id("deck:JP101")


def test_identical_cards_get_distinct_notes():
    rows = [["verbs", "", ""], ["word", "translation", "kanji"], ["みる", "to see", ""], ["みる", "to see", ""]]
    notes = apkg.build_genanki_decks(build(rows, "JP"))[1].notes
    assert len(notes) == 2
    assert notes[0].guid != notes[1].guid


def test_tags_have_no_whitespace():
    rows = [["daily life", "", ""], ["word", "translation", "kanji"], ["いえ", "house", "家"]]
    note = apkg.build_genanki_decks(build(rows, "JP"), tags=["my tag", " "])[1].notes[0]
    assert note.tags == ["vocab_deck", "my_tag", "daily_life"]


def test_stable_id_range():
    for name in ("a", "JP101", "JP101::Numbers", "日本語"):
        assert (1 << 30) <= stable_id(name) < (1 << 31)
    assert stable_id("a") != stable_id("b")


def test_model_matches_note_fields():
    model = apkg.build_model()
    assert [f["name"] for f in model.fields] == ["Word", "Translation", "ScriptForm"]
    assert "{{Word}}" in model.templates[0]["qfmt"]
    assert "{{Translation}}" in model.templates[0]["afmt"]

    payload = create_model_payload()
    assert payload["modelName"] == DEFAULT_MODEL_NAME
    assert payload["inOrderFields"] == get_note_fields()


def test_write_package(tmp_path, jp101_rows):
    target = tmp_path / "out" / "jp101.apkg"
    result = apkg.write_package(build(jp101_rows, "JP101"), target, timestamp=1_700_000_000.0)

    assert result == target
    assert zipfile.is_zipfile(target)
    with zipfile.ZipFile(target) as archive:
        assert "collection.anki2" in archive.namelist()
    assert list(target.parent.glob("*.apkg")) == [target]


def test_write_package_unwritable_path(tmp_path, jp101_rows):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    with pytest.raises(FileError, match="Could not write"):
        apkg.write_package(build(jp101_rows, "JP101"), blocker / "deck.apkg")


def test_write_package_leaves_no_partial_file(tmp_path, jp101_rows, monkeypatch):
    def boom(self, file, timestamp=None):
        with open(file, "wb") as handle:
            handle.write(b"partial")
        raise OSError("disk full")

    monkeypatch.setattr(apkg.genanki.Package, "write_to_file", boom)
    target = tmp_path / "deck.apkg"
    with pytest.raises(FileError, match="disk full"):
        apkg.write_package(build(jp101_rows, "JP101"), target)
    assert list(tmp_path.iterdir()) == []


def test_timestamp_pins_collection_times(tmp_path, jp101_rows):
    target = tmp_path / "jp101.apkg"
    apkg.write_package(build(jp101_rows, "JP101"), target, timestamp=1_700_000_000.0)

    with zipfile.ZipFile(target) as archive:
        (tmp_path / "collection.anki2").write_bytes(archive.read("collection.anki2"))
    with closing(sqlite3.connect(tmp_path / "collection.anki2")) as conn:
        note_mods = {row[0] for row in conn.execute("SELECT mod FROM notes")}
        card_mods = {row[0] for row in conn.execute("SELECT mod FROM cards")}
    assert note_mods == {1_700_000_000}
    assert card_mods == {1_700_000_000}
