from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from .editable_node import has_language_field
from .errors import MalformedKeyError
from .paths import from_key

logger = logging.getLogger(__name__)

MALFORMED_KEY = 'malformed_key'
EMPTY_PATH = 'empty_path'
LEAF_CONFLICT = 'leaf_conflict'


@dataclass(frozen=True)
class ReconstructionIssue:
    kind: str
    key: str
    message: str


def reconstruct_tree(
    changes: Mapping[str, Any],
    is_leaf: Callable[[Any], bool] = has_language_field,
) -> Tuple[Dict[str, Any], List[ReconstructionIssue]]:
    """Rebuild a nested dict from a change-set keyed by path keys.

    Changes are applied in the mapping's iteration order and the last writer
    wins: an intermediate segment that holds a leaf (per ``is_leaf``) or any
    non-dict value is replaced by an empty dict, discarding what was there.
    Undecodable keys and empty paths are skipped. Returns the tree together
    with the issues encountered; nothing here raises for a single bad entry.
    """
    tree: Dict[str, Any] = {}
    issues: List[ReconstructionIssue] = []

    for key, value in changes.items():
        try:
            segments = from_key(key)
        except MalformedKeyError as exc:
            logger.warning("Skipping change: %s", exc)
            issues.append(ReconstructionIssue(MALFORMED_KEY, key, str(exc)))
            continue

        if not segments:
            logger.warning("Skipping change with empty path: %r", key)
            issues.append(ReconstructionIssue(EMPTY_PATH, key, "path has no segments"))
            continue

        current = tree
        for segment in segments[:-1]:
            nxt = current.get(segment)
            if not isinstance(nxt, dict) or is_leaf(nxt):
                if segment in current:
                    message = f"Overwriting {'leaf' if is_leaf(nxt) else 'value'} at segment {segment!r} in path {key}"
                    logger.warning(message)
                    issues.append(ReconstructionIssue(LEAF_CONFLICT, key, message))
                nxt = {}
                current[segment] = nxt
            current = nxt

        # never share value objects between the change-set and the tree
        current[segments[-1]] = copy.deepcopy(value)

    return tree, issues
