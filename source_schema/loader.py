"""
JSON loading helpers for source documents and rule documents.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from .api import InternalInvariantError, SchemaConstructionError

logger = logging.getLogger("source_schema")


def load_json(filepath: Union[str, Path]) -> Any:
    """
    Load and parse a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        # Enhance the error message with file information
        raise json.JSONDecodeError(
            f"Failed to parse JSON in {filepath}: {e.msg}",
            e.doc,
            e.pos
        ) from e


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise InternalInvariantError(f"Duplicate key '{key}' in schema document")
        result[key] = value
    return result


def parse_schema_document(text: str) -> Dict[str, Any]:
    """
    Parse a rule document, rejecting duplicate keys.

    ``json`` silently keeps the last of two equal keys, which would hide a
    duplicated property declaration.

    Raises:
        InternalInvariantError: If any object in the document repeats a key
        SchemaConstructionError: If the text is not a JSON object
    """
    try:
        document = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise SchemaConstructionError(f"Invalid schema JSON: {e}") from e

    if not isinstance(document, dict):
        raise SchemaConstructionError("Schema document must be a JSON object")
    return document


def load_schema_document(filepath: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a rule document from disk.

    Raises:
        SchemaConstructionError: If the file is missing or malformed
        InternalInvariantError: If the document repeats a key
    """
    filepath = Path(filepath)
    logger.debug(f"Loading schema document {filepath}")
    try:
        text = filepath.read_text(encoding='utf-8')
    except OSError as e:
        raise SchemaConstructionError(f"Schema file not found: {filepath}") from e

    return parse_schema_document(text)
