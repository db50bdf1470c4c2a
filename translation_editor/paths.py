from __future__ import annotations

import json
from typing import Iterable, List, Sequence, Union

from .errors import MalformedKeyError

Path = List[str]
PathLike = Union[str, Sequence[str]]


def to_key(path: Iterable[str]) -> str:
    """Serialize a path to its canonical key.

    The output is byte-for-byte what JavaScript's ``JSON.stringify`` produces
    for an array of strings (no whitespace, non-ASCII kept as is), so keys
    written by other tools can be used without going through this module.
    """
    segments = list(path)
    for segment in segments:
        if not isinstance(segment, str):
            raise TypeError(f"Path segments must be strings, got {type(segment).__name__}: {segment!r}")
    return json.dumps(segments, ensure_ascii=False, separators=(',', ':'))


def from_key(key: str) -> Path:
    """Decode a path key back into a list of segments."""
    if not isinstance(key, str):
        raise MalformedKeyError(key, "not a string")
    try:
        parsed = json.loads(key)
    except ValueError as exc:
        raise MalformedKeyError(key, f"failed to parse: {exc}") from exc

    if not isinstance(parsed, list) or not all(isinstance(p, str) for p in parsed):
        raise MalformedKeyError(key, "parsed JSON is not an array of strings")
    return parsed


def normalize_to_path(path: PathLike) -> Path:
    """Accept either a path or a path key and return the path."""
    if isinstance(path, str):
        return from_key(path)
    return list(path)


def format_path(path: Sequence[str], sep: str = ' › ') -> str:
    """Human readable rendering of a path, for display only."""
    return sep.join(path) if path else '(root)'


def canonical_key(path: PathLike) -> str:
    """Return the canonical key for a path or an author-built key.

    Keys are decoded and re-encoded, so
    ``'["a", "b"]'`` and ``'["a","b"]'`` compare equal afterwards.
    """
    return to_key(normalize_to_path(path))
