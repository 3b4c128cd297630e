"""
Data models for topic-grouped vocabulary and the decks built from it.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

# Parsed CSV: ordered rows of text cells, rows may differ in length.
RawTable = List[List[str]]

TOPIC_SEPARATOR = "::"


class TopicBlock(BaseModel):
    """Three consecutive columns (word, translation, script form) under one topic label."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="Topic label read from row 0")
    start_column: int = Field(..., ge=0, description="Index of the block's word column")


class VocabEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1, description="The word being learned")
    translation: str = Field(default="", description="Meaning of the word")
    script_form: str = Field(default="", description="Alternate script, e.g. kanji")


class Flashcard(BaseModel):
    """A front/back study unit. Cards have no identity beyond their position."""
    model_config = ConfigDict(frozen=True)

    front: str = Field(..., description="Word shown on the front")
    back: str = Field(default="", description="Translation shown on the back")
    script_form: str = Field(default="", description="Optional annotation shown with the front")

    @classmethod
    def from_entry(cls, entry: VocabEntry) -> "Flashcard":
        return cls(front=entry.word, back=entry.translation, script_form=entry.script_form)


class SubDeck(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Full hierarchical name, e.g. 'JP101::Numbers'")
    topic: str = Field(..., description="Topic label the sub-deck was built from")
    cards: List[Flashcard] = Field(default_factory=list)


class Deck(BaseModel):
    """Top-level deck holding one sub-deck per topic, in column order."""
    model_config = ConfigDict(frozen=True)

    name: str
    sub_decks: List[SubDeck] = Field(default_factory=list)

    @property
    def card_count(self) -> int:
        return sum(len(sub.cards) for sub in self.sub_decks)


def sub_deck_name(deck_name: str, topic: str) -> str:
    return f"{deck_name}{TOPIC_SEPARATOR}{topic}"
