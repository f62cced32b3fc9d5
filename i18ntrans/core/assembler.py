"""Result assembler: rebuild a translated document from path-addressed results."""

from __future__ import annotations
from typing import Any, Dict

from i18ntrans.core.models import Document, LeafPath, TaskResult

FAILURE_MARKER_PREFIX = "[TRANSLATION FAILED] "


def failure_marker(source_text: str) -> str:
    """Inline value for a leaf whose translation failed."""
    return f"{FAILURE_MARKER_PREFIX}{source_text}"


def is_failure_marker(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(FAILURE_MARKER_PREFIX)


def _rebuild(node: Any, path: LeafPath, results: Dict[LeafPath, TaskResult]) -> Any:
    if isinstance(node, dict):
        return {key: _rebuild(value, path + (key,), results) for key, value in node.items()}
    if isinstance(node, list):
        return [_rebuild(value, path + (index,), results) for index, value in enumerate(node)]
    if isinstance(node, str):
        result = results.get(path)
        if result is None:
            return node
        if result.succeeded:
            return result.translation
        return failure_marker(node)
    return node


def assemble_document(document: Document, results: Dict[LeafPath, TaskResult]) -> Document:
    """
    Build the output document for one language.

    The output has the same keys, nesting and key order as ``document``.
    Leaves without a result and non-string scalars are copied as-is, failed
    leaves are replaced by a failure marker. ``document`` is not modified.
    """
    return _rebuild(document, (), results)
