"""
Document walker.

Flattens a nested document into path-addressed string leaves in depth-first,
key-insertion order. Non-string scalars are left where they are; the assembler
rebuilds the document from the original, so their positions are never lost.

Null policy: ``None`` leaves are passed through unchanged and serialize back to
``null``. They are never turned into empty strings and never translated.
"""

from __future__ import annotations
from typing import Any, Iterator, List

from i18ntrans.core.models import LeafEntry, LeafPath, TranslationTask
from i18ntrans.utils.language_detector import needs_translation


def iter_leaves(node: Any, path: LeafPath = ()) -> Iterator[LeafEntry]:
    """Yield every string leaf below ``node``."""
    if isinstance(node, dict):
        for key, value in node.items():
            yield from iter_leaves(value, path + (key,))
    elif isinstance(node, list):
        for index, value in enumerate(node):
            yield from iter_leaves(value, path + (index,))
    elif isinstance(node, str):
        yield LeafEntry(path=path, text=node)


def walk_document(document: Any) -> List[LeafEntry]:
    """Collect all string leaves of a document in depth-first order."""
    return list(iter_leaves(document))


def is_translatable(text: str, source_lang: str) -> bool:
    """A leaf is translatable when it holds source-language characters."""
    return needs_translation(text, source_lang)


def build_tasks(
    entries: List[LeafEntry],
    target_lang: str,
    source_lang: str
) -> List[TranslationTask]:
    """Create one task per translatable leaf, preserving walk order."""
    return [
        TranslationTask(path=entry.path, source_text=entry.text, target_lang=target_lang)
        for entry in entries
        if is_translatable(entry.text, source_lang)
    ]
