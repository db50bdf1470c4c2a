from __future__ import annotations

import logging
import time
from typing import Any, Callable, List, Optional

from .editable_node import NOT_A_LEAF
from .flat_index import Entry, FlatIndex

logger = logging.getLogger(__name__)

LeafPredicate = Callable[[Any], Any]


def flatten_tree(root: Any, is_leaf: Optional[LeafPredicate] = None) -> List[Entry]:
    """Flatten nested dicts into entries, depth-first in key order.

    ``is_leaf`` returns the leaf value to store, or ``NOT_A_LEAF`` to keep
    descending. Dicts it does not claim are recursed into; anything else
    (strings, numbers, None, lists) becomes an entry carrying the raw value.
    Empty dicts contribute nothing.
    """
    entries: List[Entry] = []
    if isinstance(root, dict):
        _flatten_into(entries, root, [], is_leaf)
    return entries


def _flatten_into(entries: List[Entry], node: dict, parent: List[str], is_leaf: Optional[LeafPredicate]) -> None:
    for k, v in node.items():
        path = parent + [k if isinstance(k, str) else str(k)]
        detected = is_leaf(v) if is_leaf is not None else NOT_A_LEAF
        if detected is not NOT_A_LEAF:
            entries.append(Entry(path, detected))
        elif isinstance(v, dict):
            _flatten_into(entries, v, path, is_leaf)
        else:
            entries.append(Entry(path, v))


def build_baseline(root: Any, is_leaf: Optional[LeafPredicate] = None) -> FlatIndex:
    """Flatten ``root`` into a new FlatIndex and log how long it took."""
    start = time.perf_counter()
    index = FlatIndex(flatten_tree(root, is_leaf))
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug("Flattened %d entries in %.2fms", len(index), elapsed_ms)
    return index
