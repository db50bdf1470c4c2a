"""Helpers for the caller-owned change-set (path key -> proposed node)."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from .editable_node import is_empty_proposal
from .errors import MalformedKeyError
from .flat_index import Entry, FlatIndex
from .paths import Path, PathLike, canonical_key, from_key

logger = logging.getLogger(__name__)

ChangeSet = Dict[str, Dict[str, Any]]


def record_change(changes: Mapping[str, Any], path: PathLike, node: Dict[str, Any]) -> ChangeSet:
    """Return a new change-set with ``node`` proposed at ``path``.

    A node without any language value withdraws the proposal instead.
    """
    key = canonical_key(path)
    updated = dict(changes)
    if is_empty_proposal(node):
        updated.pop(key, None)
    else:
        updated[key] = dict(node)
    return updated


def proposed_paths(changes: Mapping[str, Any]) -> List[Path]:
    paths: List[Path] = []
    for key in changes:
        try:
            paths.append(from_key(key))
        except MalformedKeyError as exc:
            logger.warning("Ignoring proposed change: %s", exc)
    return paths


def count_shown_changes(view: FlatIndex, changes: Mapping[str, Any]) -> int:
    """Number of entries in ``view`` that have a proposed change."""
    return sum(1 for entry in view.entries if entry.key in changes)


def merged_value(entry: Entry, changes: Mapping[str, Any]) -> Any:
    return changes.get(entry.key, entry.value)
