from .apkg import build_genanki_decks, build_model, write_package
from .note_model import DEFAULT_MODEL_NAME, card_fields, create_model_payload, stable_id
