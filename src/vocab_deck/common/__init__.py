from .errors import AnkiConnectError, ConfigError, FileError, FormatError, VocabDeckError
from .logging_config import ContextFormatter, setup_logging
