"""
Script-based language heuristics.

Only used to decide whether a leaf string is worth sending to the provider;
this is not a general language detector.
"""

import re
from typing import Dict, Pattern

from i18ntrans.core.languages import normalize_language_code


SCRIPT_RANGES: Dict[str, Pattern] = {
    "chinese": re.compile(r"[\u4e00-\u9fa5]"),
    "japanese": re.compile(r"[\u3040-\u309F\u30A0-\u30FF]"),
    "korean": re.compile(r"[\uAC00-\uD7AF\u1100-\u11FF\u3130-\u318F]"),
    "latin": re.compile(r"[a-zA-Z]"),
    "cyrillic": re.compile(r"[\u0400-\u04FF]"),
    "thai": re.compile(r"[\u0E00-\u0E7F]"),
    "vietnamese": re.compile(r"[\u00C0-\u1EF9]"),
    "arabic": re.compile(r"[\u0600-\u06FF]"),
}

LANGUAGE_SCRIPTS: Dict[str, str] = {
    "zh": "chinese",
    "zh-TW": "chinese",
    "ja": "japanese",
    "ko": "korean",
    "ru": "cyrillic",
    "th": "thai",
    "vi": "vietnamese",
    "ar": "arabic",
}


def script_for_language(language: str) -> str:
    """Script used to spot source-language text; latin for anything unlisted."""
    return LANGUAGE_SCRIPTS.get(normalize_language_code(language), "latin")


def contains_script(text: str, script: str) -> bool:
    pattern = SCRIPT_RANGES.get(script)
    return bool(pattern and pattern.search(text))


def needs_translation(text: str, source_lang: str) -> bool:
    """
    Check if a string contains source-language text.

    A single character of the source script is enough, so mixed strings like
    "Token使用量" are still translated.
    """
    if not text or not text.strip():
        return False

    return contains_script(text, script_for_language(source_lang))
