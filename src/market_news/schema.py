"""Validation of sentiment lexicon files against the packaged JSON schema."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

SCHEMA_FILE = "lexicon_schema.json"


def default_schema_path() -> Path:
    return Path(__file__).resolve().parent / "schemas" / SCHEMA_FILE


@lru_cache(maxsize=None)
def load_schema() -> Dict[str, Any]:
    """Packaged lexicon schema, read once per process."""
    return json.loads(default_schema_path().read_text(encoding="utf-8"))


def error_location(error: ValidationError) -> str:
    """Dotted path of the offending value, e.g. `bullish.0`."""
    return ".".join(str(piece) for piece in error.absolute_path) or "<root>"


def format_errors(errors: Iterable[ValidationError]) -> str:
    return "; ".join(f"{error_location(err)}: {err.message}" for err in errors)


def validate_lexicon_payload(
    payload: Any, schema: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Check that every keyword set is a list of distinct non-blank terms and
    that both `bullish` and `bearish` are present.

    Raises ValueError listing each problem by location.
    """
    validator = Draft202012Validator(schema or load_schema())
    errors = sorted(validator.iter_errors(payload), key=error_location)
    if errors:
        raise ValueError(f"Lexicon validation failed: {format_errors(errors)}")
    return payload
