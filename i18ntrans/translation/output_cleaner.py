"""
Output cleaning utilities for LLM translations.

Removes common LLM output artifacts:
- <think>...</think> wrappers
- "Translation:" style prefixes
- Code fence wrappers
- Quotes wrapping the whole answer (unless the source itself was quoted)
"""

import re
from typing import Optional

_LABEL_PATTERNS = [
    r'^Translation:\s*',
    r'^Translated text:\s*',
    r'^Output:\s*',
    r'^Result:\s*',
]

_QUOTE_PAIRS = [('"', '"'), ("'", "'"), ('“', '”'), ('「', '」')]


def _is_wrapped(text: str, opening: str, closing: str) -> bool:
    return len(text) >= 2 and text.startswith(opening) and text.endswith(closing)


def clean_translation_output(text: str, source_text: Optional[str] = None) -> str:
    """
    Clean LLM translation output to extract only the translated text.

    Args:
        text: Raw LLM output
        source_text: Text that was translated, used to keep intentional quotes

    Returns:
        Cleaned translation text; empty input stays empty
    """
    if not text:
        return text

    original = text

    text = re.sub(r'<think>.*?</think>', '', text, flags=re.DOTALL | re.IGNORECASE)
    text = re.sub(r'<thinking>.*?</thinking>', '', text, flags=re.DOTALL | re.IGNORECASE)

    # ```lang\ntext\n```
    match = re.match(r'^```(?:\w+)?\s*\n(.*?)\n```\s*$', text.strip(), re.DOTALL)
    if match:
        text = match.group(1)

    for pattern in _LABEL_PATTERNS:
        text = re.sub(pattern, '', text, flags=re.IGNORECASE)

    text = text.strip()
    source = (source_text or "").strip()
    for opening, closing in _QUOTE_PAIRS:
        if _is_wrapped(text, opening, closing):
            if not source.startswith(opening):
                text = text[1:-1].strip()
            break

    # If we removed everything, return original
    if not text:
        return original.strip()

    return text
