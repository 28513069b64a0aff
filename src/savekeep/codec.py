from __future__ import annotations

import json
import logging
from typing import Any, Dict

from jsonschema import Draft202012Validator

from .document import SCHEMA_VERSION, Document
from .errors import SaveValidationError

logger = logging.getLogger(__name__)

DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["schema_version", "health", "position", "collected", "counters"],
    "properties": {
        "schema_version": {"type": "integer", "minimum": 1},
        "created_at": {"type": "string"},
        "updated_at": {"type": "string"},
        "health": {"type": "integer"},
        "position": {
            "type": "array",
            "items": {"type": "number"},
            "minItems": 2,
            "maxItems": 2,
        },
        "play_time_seconds": {"type": "number", "minimum": 0},
        "collected": {"type": "object", "additionalProperties": {"type": "boolean"}},
        "counters": {"type": "object", "additionalProperties": {"type": "integer"}},
    },
}

_validator = Draft202012Validator(DOCUMENT_SCHEMA)


def encode_document(document: Document) -> bytes:
    """Encode a Document to canonical JSON bytes (sorted keys, UTF-8)."""
    text = json.dumps(document.to_dict(), ensure_ascii=False, sort_keys=True, indent=2)
    return text.encode("utf-8")


def decode_document(raw: bytes) -> Document:
    """Decode JSON bytes into a Document, validating shape and schema version."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SaveValidationError(f"Invalid JSON: {e}") from e

    validate_document_dict(data)

    version = data["schema_version"]
    if version > SCHEMA_VERSION:
        raise SaveValidationError(
            f"Save schema version {version} is newer than supported {SCHEMA_VERSION}."
        )

    return Document.from_dict(data)


def validate_document_dict(data: Any) -> None:
    """Validate a decoded JSON value against the document schema.

    Raises:
        SaveValidationError listing the first schema violation.
    """
    errors = sorted(_validator.iter_errors(data), key=lambda e: str(list(e.path)))
    if errors:
        for err in errors:
            logger.debug("Document schema violation at %s: %s", list(err.path), err.message)
        first = errors[0]
        raise SaveValidationError(f"Invalid document at {list(first.path)}: {first.message}")


__all__ = ["DOCUMENT_SCHEMA", "encode_document", "decode_document", "validate_document_dict"]
