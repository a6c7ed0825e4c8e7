"""Raw character-matrix detection and parsing."""

from __future__ import annotations

import json
from typing import Any

from .errors import ValidationError
from .models import CharacterMatrix

# Shorter inputs are treated as template text, so "[[1]]" is not sniffed as raw.
RAW_MIN_LENGTH = 10


def coerce_matrix(value: Any) -> CharacterMatrix | None:
    """Return ``value`` as an array of integer arrays, or None if it is not one."""
    if not isinstance(value, list):
        return None
    rows: CharacterMatrix = []
    for row in value:
        if not isinstance(row, list):
            return None
        for cell in row:
            if isinstance(cell, bool) or not isinstance(cell, int):
                return None
        rows.append(list(row))
    return rows


def looks_like_raw_characters(text: str) -> bool:
    """Heuristic: is ``text`` already a character matrix rather than prose?"""
    trimmed = text.strip()
    if len(trimmed) < RAW_MIN_LENGTH:
        return False
    if not (trimmed.startswith("[") and trimmed.endswith("]")):
        return False
    try:
        value = json.loads(trimmed)
    except (ValueError, RecursionError):
        return False
    return coerce_matrix(value) is not None


def parse_characters(text: str) -> CharacterMatrix:
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise ValidationError(f"raw input must be a JSON array of arrays of integers: {exc}") from exc
    characters = coerce_matrix(value)
    if characters is None:
        raise ValidationError("raw input must be a JSON array of arrays of integers")
    if not characters:
        raise ValidationError("raw input must be a JSON array of arrays of integers: empty array")
    return characters
