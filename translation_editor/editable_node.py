"""Leaf predicates for translation catalogues.

An editable node is a mapping from language code to translated string, e.g.
``{"en": "Hello", "ja": "こんにちは"}``. Proposed edits use the same shape.
"""
from __future__ import annotations

from typing import Any, Dict

EditableNode = Dict[str, str]

LANGUAGE_FIELDS = ('en', 'ja')


class _NotALeaf:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NOT_A_LEAF'

    def __bool__(self) -> bool:
        return False


# Returned by leaf predicates for values that should be recursed into.
NOT_A_LEAF = _NotALeaf()


def is_editable_node(value: Any) -> Any:
    """Leaf predicate: a dict whose values are all strings.

    Empty dicts count as editable nodes. Returns the value itself when it is
    a leaf and ``NOT_A_LEAF`` otherwise.
    """
    if not isinstance(value, dict):
        return NOT_A_LEAF
    if all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
        return value
    return NOT_A_LEAF


def has_language_field(value: Any) -> bool:
    """True when ``value`` carries at least one known language field."""
    return isinstance(value, dict) and any(lang in value for lang in LANGUAGE_FIELDS)


def language_field_predicate(value: Any) -> Any:
    """Leaf predicate recognizing dicts with an ``en`` or ``ja`` field."""
    return value if has_language_field(value) else NOT_A_LEAF


def is_empty_proposal(node: Dict[str, Any]) -> bool:
    """A proposal with no language value means "no change"."""
    return all(node.get(lang) is None for lang in LANGUAGE_FIELDS)
