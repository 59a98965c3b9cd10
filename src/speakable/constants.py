"""Shared constants for speakable."""

DEFAULT_TTS_MODEL_ID = "tts_models/en/ljspeech/tacotron2-DDC"
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_LEVEL = "INFO"

# Ordered (glyph, substitute) pairs applied before any other text stage.
REPLACEMENT_TABLE = (
    ("’", "'"),
)

QUOTE_CHARS = frozenset({"'", '"', "“", "”", "‘", "’"})

WHITELIST = frozenset("abcdefghijklmnopqrstuvwxyz0123456789$£!.?,'&;: -")
