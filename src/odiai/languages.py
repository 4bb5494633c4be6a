from enum import Enum


class Language(str, Enum):
    AUTO = "Auto-Detect"
    ENGLISH = "English"
    HINDI = "Hindi"
    ODIA = "Odia"


# Hints the user can pick for the input text; the target is always Odia.
SOURCE_LANGUAGES = (Language.AUTO, Language.ENGLISH, Language.HINDI)
TARGET_LANGUAGE = Language.ODIA


def parse_source_language(value: str) -> Language:
    """Map a client-supplied hint to a source Language, raising ValueError otherwise."""
    try:
        language = Language(value)
    except ValueError:
        raise ValueError(f"Unknown language: {value!r}") from None
    if language not in SOURCE_LANGUAGES:
        raise ValueError(f"{language.value} is not a source language")
    return language
