"""
Named defaults for the question/translation admin panel.

The language set is closed. Listing and completeness defaults seed the
matching settings fields, which the environment can override.
"""

# Languages a logical question can be realized in. English is the base.
SUPPORTED_LANGUAGES = ("en", "fr", "ja")
BASE_LANGUAGE = "en"
TRANSLATION_LANGUAGES = ("fr", "ja")

# Translation set slot per language code
LANGUAGE_SLOTS = {
    "en": "english",
    "fr": "french",
    "ja": "japanese",
}

# Listing page sizes accepted from the query string; anything else falls back
ALLOWED_PAGE_SIZES = (25, 50, 100)
DEFAULT_PAGE_SIZE = 25

# A base question always exists, even when its translation lookup came back empty
DEFAULT_COMPLETENESS = 1

UNKNOWN_CATEGORY_LABEL = "Unknown"
