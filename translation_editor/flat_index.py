from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .errors import MalformedKeyError
from .paths import PathLike, canonical_key, to_key

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Entry(Generic[T]):
    """One flattened leaf: a path and its (replaceable) value.

    The path is fixed at construction; to move an entry, remove it and insert
    a new one.
    """

    __slots__ = ('_path', '_key', 'value')

    def __init__(self, path: Iterable[str], value: T):
        self._path: Tuple[str, ...] = tuple(path)
        self._key = to_key(self._path)
        self.value = value

    @property
    def path(self) -> Tuple[str, ...]:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._path == other._path and self.value == other.value

    __hash__ = None  # mutable value

    def __repr__(self) -> str:
        return f"Entry(path={list(self._path)!r}, value={self.value!r})"


class FlatIndex(Generic[T]):
    """Ordered entries plus a path-key -> position map.

    ``insert`` never deduplicates: inserting a path twice keeps both entries
    in the sequence while lookups resolve to the most recent one.
    """

    def __init__(self, entries: Optional[Iterable[Entry[T]]] = None):
        self._entries: List[Entry[T]] = []
        self._key_map: Dict[str, int] = {}
        if entries is not None:
            self.set_all(entries)

    @property
    def entries(self) -> Tuple[Entry[T], ...]:
        return tuple(self._entries)

    @property
    def key_map(self) -> Dict[str, int]:
        return dict(self._key_map)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry[T]]:
        return iter(list(self._entries))

    def __contains__(self, path: Any) -> bool:
        try:
            return canonical_key(path) in self._key_map
        except (MalformedKeyError, TypeError):
            return False

    def __repr__(self) -> str:
        return f"FlatIndex({len(self._entries)} entries)"

    def keys(self) -> List[str]:
        """Path keys in sequence order (duplicates included)."""
        return [e.key for e in self._entries]

    def get(self, path: PathLike) -> Optional[Entry[T]]:
        index = self._key_map.get(canonical_key(path))
        return None if index is None else self._entries[index]

    def insert(self, entry: Entry[T]) -> None:
        self._entries.append(entry)
        self._key_map[entry.key] = len(self._entries) - 1

    def remove(self, path: PathLike) -> bool:
        key = canonical_key(path)
        index = self._key_map.get(key)
        if index is None:
            return False
        del self._entries[index]
        self._rebuild_map()
        return True

    def update(self, path: PathLike, value: T) -> bool:
        index = self._key_map.get(canonical_key(path))
        if index is None:
            return False
        self._entries[index].value = value
        return True

    def set_all(self, entries: Iterable[Entry[T]]) -> None:
        """Replace every entry and rebuild the map in a single pass."""
        self._entries = list(entries)
        self._rebuild_map()

    def get_by_paths(self, paths: Iterable[PathLike]) -> List[Entry[T]]:
        """Entries for ``paths`` in request order; unknown or malformed paths are skipped."""
        found: List[Entry[T]] = []
        for path in paths:
            try:
                key = canonical_key(path)
            except MalformedKeyError as exc:
                logger.warning("Skipping lookup: %s", exc)
                continue
            index = self._key_map.get(key)
            if index is not None:
                found.append(self._entries[index])
        return found

    def _rebuild_map(self) -> None:
        # Later duplicates overwrite earlier ones, matching insert().
        self._key_map = {entry.key: i for i, entry in enumerate(self._entries)}
