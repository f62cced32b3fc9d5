"""
Reading source documents and writing translated ones.

Every failure here is fatal to the invocation and surfaces as DocumentIOError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from i18ntrans.core.exceptions import DocumentIOError

logger = logging.getLogger(__name__)

ERROR_REPORT_NAME = "translation-errors.json"

PathLike = Union[str, Path]


def read_json_document(file_path: PathLike) -> Dict[str, Any]:
    """Read a UTF-8 JSON object, preserving key order."""
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        raise DocumentIOError(
            f"Failed to read JSON file: {e}",
            path=str(path),
            operation="read"
        ) from e

    if not isinstance(document, dict):
        raise DocumentIOError(
            f"Failed to read JSON file: top-level value must be an object, got {type(document).__name__}",
            path=str(path),
            operation="read"
        )

    logger.debug(f"Loaded {path} ({len(document)} top-level keys)")
    return document


def ensure_output_dir(output_dir: PathLike) -> Path:
    path = Path(output_dir)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DocumentIOError(
            f"Failed to create output directory: {e}",
            path=str(path),
            operation="mkdir"
        ) from e
    return path


def write_json_file(file_path: PathLike, data: Any) -> Path:
    """Write JSON with two-space indentation and unescaped unicode."""
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except (OSError, TypeError, ValueError) as e:
        raise DocumentIOError(
            f"Failed to write JSON file: {e}",
            path=str(path),
            operation="write"
        ) from e
    return path


def save_translation(output_dir: PathLike, language_code: str, document: Dict[str, Any]) -> Path:
    """Save one translated document as ``{output_dir}/{language_code}.json``."""
    output_path = Path(output_dir) / f"{language_code}.json"
    write_json_file(output_path, document)
    logger.info(f"Saved translation to: {output_path}")
    return output_path


def save_error_report(output_dir: PathLike, report: Dict[str, Any]) -> Path:
    """Save the aggregate error report next to the translations."""
    output_path = Path(output_dir) / ERROR_REPORT_NAME
    write_json_file(output_path, report)
    logger.warning(f"Error report written to: {output_path}")
    return output_path
