"""Run configuration for vocab_deck, loaded from an optional YAML file."""
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from vocab_deck.anki_export.note_model import DEFAULT_MODEL_NAME
from vocab_deck.anki_sync.anki_connect import DEFAULT_ANKI_CONNECT_URL
from vocab_deck.common.errors import ConfigError


class RunConfig(BaseModel):
    """Configuration for a CSV → Anki deck run.

    - output_dir: directory for the .apkg when no explicit output path is given
    - tags: extra tags added to every note, next to the topic tag
    - anki_connect_url: AnkiConnect endpoint used with --sync
    - model_name: name of the note type created in Anki
    """

    output_dir: Optional[Path] = Field(
        default=None, description="Directory for generated .apkg files (defaults to the input's directory)"
    )
    tags: List[str] = Field(default_factory=list, description="Extra tags for every note")
    anki_connect_url: str = Field(
        default_factory=lambda: os.getenv("ANKI_CONNECT_URL", DEFAULT_ANKI_CONNECT_URL),
        description="AnkiConnect URL",
    )
    model_name: str = Field(default=DEFAULT_MODEL_NAME, min_length=1, description="Anki note type name")


def load_config(path: Optional[Path]) -> RunConfig:
    """Load a RunConfig from YAML; no path means defaults only.

    Raises:
        ConfigError: If the file is missing, not YAML or fails validation
    """
    if path is None:
        return RunConfig()
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}\n{e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping at the top level: {path}")

    try:
        return RunConfig.model_validate(raw)
    except ValidationError as ve:
        raise ConfigError(f"Invalid configuration in {path}:\n{ve}") from ve
