"""Filter criteria and the filter engine.

Views are always computed from the baseline index passed in by the caller,
never from another view, so criteria never compound.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set, Tuple, Union

from .errors import MalformedKeyError
from .flat_index import Entry, FlatIndex
from .paths import PathLike, canonical_key, normalize_to_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AllCriterion:
    mode = 'all'

    def to_dict(self) -> Dict[str, Any]:
        return {'mode': self.mode}


@dataclass(frozen=True)
class TextCriterion:
    query: str = ''
    mode = 'text'

    def to_dict(self) -> Dict[str, Any]:
        return {'mode': self.mode, 'query': self.query}


@dataclass(frozen=True)
class KeyPathsCriterion:
    paths: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)
    mode = 'keyPaths'

    def __post_init__(self):
        object.__setattr__(self, 'paths', _freeze_paths(self.paths))

    def to_dict(self) -> Dict[str, Any]:
        return {'mode': self.mode, 'paths': [list(p) for p in self.paths]}


@dataclass(frozen=True)
class CombinedCriterion:
    query: str = ''
    key_paths: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)
    mode = 'combined'

    def __post_init__(self):
        object.__setattr__(self, 'key_paths', _freeze_paths(self.key_paths))

    def to_dict(self) -> Dict[str, Any]:
        return {'mode': self.mode, 'query': self.query, 'keyPaths': [list(p) for p in self.key_paths]}


FilterCriterion = Union[AllCriterion, TextCriterion, KeyPathsCriterion, CombinedCriterion]


def _freeze_paths(paths: Iterable[PathLike]) -> Tuple[Tuple[str, ...], ...]:
    frozen = []
    for p in paths or ():
        if isinstance(p, str):
            try:
                p = normalize_to_path(p)
            except MalformedKeyError as exc:
                logger.warning("Dropping path from criterion: %s", exc)
                continue
        frozen.append(tuple(p))
    return tuple(frozen)


def criterion_from_dict(data: Dict[str, Any]) -> FilterCriterion:
    """Build a criterion from its tagged form, e.g. ``{"mode": "text", "query": "hi"}``."""
    mode = (data or {}).get('mode')
    if mode == 'all':
        return AllCriterion()
    if mode == 'text':
        return TextCriterion(data.get('query') or '')
    if mode == 'keyPaths':
        return KeyPathsCriterion(data.get('paths') or ())
    if mode == 'combined':
        return CombinedCriterion(data.get('query') or '', data.get('keyPaths') or ())
    raise ValueError(f"Unknown filter mode: {mode!r}")


def criterion_from_search(query: str, include_proposed: bool, proposed_paths: Sequence[PathLike]) -> FilterCriterion:
    """Translate the search box state into a criterion."""
    query = query or ''
    has_paths = bool(proposed_paths)
    if query and include_proposed and has_paths:
        return CombinedCriterion(query, proposed_paths)
    if query:
        return TextCriterion(query)
    if include_proposed and has_paths:
        return KeyPathsCriterion(proposed_paths)
    return AllCriterion()


def _contains(haystack: str, needle: str) -> bool:
    return needle in haystack.casefold()


def matches_text(entry: Entry, query: str) -> bool:
    """Case-insensitive substring match against path segments and the value.

    Checked in order: path segments, a string value itself, the string
    field values of a dict (or elements of a list), then the field names
    (list indices for lists).
    """
    needle = query.casefold()
    if any(_contains(segment, needle) for segment in entry.path):
        return True

    value = entry.value
    if isinstance(value, str):
        return _contains(value, needle)
    if isinstance(value, (list, tuple)):
        fields = [(str(i), v) for i, v in enumerate(value)]
    elif isinstance(value, dict):
        fields = list(value.items())
    else:
        return False
    if any(isinstance(v, str) and _contains(v, needle) for _, v in fields):
        return True
    return any(isinstance(k, str) and _contains(k, needle) for k, _ in fields)


def _text_matches(baseline: FlatIndex, query: str) -> List[Entry]:
    if not query:
        return list(baseline.entries)
    return [e for e in baseline.entries if matches_text(e, query)]


def _key_path_matches(baseline: FlatIndex, paths: Iterable[PathLike]) -> List[Entry]:
    wanted: Set[str] = set()
    for p in paths:
        try:
            wanted.add(canonical_key(p))
        except MalformedKeyError as exc:
            logger.warning("Skipping key path: %s", exc)
    if not wanted:
        return []
    return [e for e in baseline.entries if e.key in wanted]


def filter_entries(baseline: FlatIndex, criterion: FilterCriterion) -> FlatIndex:
    """Compute a new view of ``baseline`` for ``criterion``.

    The baseline is never modified. Entries keep their baseline order.
    """
    if isinstance(criterion, AllCriterion):
        selected = list(baseline.entries)
    elif isinstance(criterion, TextCriterion):
        selected = _text_matches(baseline, criterion.query)
    elif isinstance(criterion, KeyPathsCriterion):
        selected = _key_path_matches(baseline, criterion.paths)
    elif isinstance(criterion, CombinedCriterion):
        merged: Dict[str, Entry] = {}
        for entry in _text_matches(baseline, criterion.query):
            merged.setdefault(entry.key, entry)
        logger.debug("Text filter (%r) found %d", criterion.query, len(merged))
        if criterion.key_paths:
            for entry in _key_path_matches(baseline, criterion.key_paths):
                merged.setdefault(entry.key, entry)
        else:
            logger.debug("No key paths provided for combined filter, skipping key path pass.")
        selected = list(merged.values())
    else:
        raise TypeError(f"Unsupported filter criterion: {criterion!r}")

    view = FlatIndex()
    view.set_all(selected)
    logger.debug("Filter %s -> %d of %d entries", criterion.to_dict(), len(view), len(baseline))
    return view
