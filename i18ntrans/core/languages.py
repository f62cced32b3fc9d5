"""
Supported target languages and alias normalization.

The alias table is fixed: "cn" always means Simplified Chinese ("zh") and "tw"
always means Traditional Chinese ("zh-TW").
"""

from typing import Dict, List

from i18ntrans.core.exceptions import UnsupportedLanguageError


SUPPORTED_LANGUAGES: Dict[str, Dict[str, str]] = {
    "en": {"name": "English", "native_name": "English"},
    "es": {"name": "Spanish", "native_name": "Español"},
    "fr": {"name": "French", "native_name": "Français"},
    "de": {"name": "German", "native_name": "Deutsch"},
    "it": {"name": "Italian", "native_name": "Italiano"},
    "pt": {"name": "Portuguese", "native_name": "Português"},
    "ru": {"name": "Russian", "native_name": "Русский"},
    "ja": {"name": "Japanese", "native_name": "日本語"},
    "ko": {"name": "Korean", "native_name": "한국어"},
    "vi": {"name": "Vietnamese", "native_name": "Tiếng Việt"},
    "zh": {"name": "Chinese (Simplified)", "native_name": "简体中文"},
    "zh-TW": {"name": "Chinese (Traditional)", "native_name": "繁體中文"},
    "th": {"name": "Thai", "native_name": "ไทย"},
    "id": {"name": "Indonesian", "native_name": "Bahasa Indonesia"},
    "ar": {"name": "Arabic", "native_name": "العربية"},
}

LANGUAGE_ALIASES: Dict[str, str] = {
    "kr": "ko",
    "jp": "ja",
    "cn": "zh",
    "zh-cn": "zh",
    "zh-hans": "zh",
    "tw": "zh-TW",
    "zh-tw": "zh-TW",
    "zh-hant": "zh-TW",
    "vn": "vi",
    "br": "pt",
}

# Lower-cased lookup so "ZH-tw" and "EN" resolve to canonical spellings
_CANONICAL_BY_LOWER = {code.lower(): code for code in SUPPORTED_LANGUAGES}


def normalize_language_code(code: str) -> str:
    """
    Map a requested language code to its canonical form.

    Unknown codes are returned stripped and lower-cased; validation is a
    separate step.
    """
    lowered = code.strip().replace("_", "-").lower()
    if lowered in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[lowered]
    return _CANONICAL_BY_LOWER.get(lowered, lowered)


def is_supported(code: str) -> bool:
    return normalize_language_code(code) in SUPPORTED_LANGUAGES


def validate_language(code: str) -> str:
    """
    Normalize and validate a requested language code.

    Returns:
        The canonical code

    Raises:
        UnsupportedLanguageError: if the canonical code is not supported
    """
    canonical = normalize_language_code(code)
    if canonical not in SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(
            requested=code,
            canonical=canonical,
            supported=list(SUPPORTED_LANGUAGES)
        )
    return canonical


def get_language_name(code: str) -> str:
    """Get English name for a language code, falling back to the code itself."""
    canonical = normalize_language_code(code)
    info = SUPPORTED_LANGUAGES.get(canonical)
    return info["name"] if info else code


def parse_language_list(value: str) -> List[str]:
    """Split a comma-separated language list, dropping blanks and duplicates."""
    languages: List[str] = []
    for part in value.split(","):
        part = part.strip()
        if part and part not in languages:
            languages.append(part)
    return languages
