import threading
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableMapping
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class UniqueConstraintError(Exception):
    """Raised when an insert would duplicate an existing unique key."""

    def __init__(self, unique_key: Hashable, existing_key) -> None:
        super().__init__(f"unique key {unique_key!r} already held by {existing_key!r}")
        self.unique_key = unique_key
        self.existing_key = existing_key


class InMemoryKeyValueDatabase(Generic[K, V]):
    """
    Simple in-memory key/value database with an optional unique index.

    Values inserted through ``insert_unique`` reserve a unique key (for shifts:
    client, shift type and date). A second insert for the same unique key is
    rejected with ``UniqueConstraintError`` instead of creating a duplicate.
    """

    def __init__(self) -> None:
        self._store: MutableMapping[K, V] = {}
        self._unique: dict[Hashable, K] = {}
        self._unique_by_key: dict[K, Hashable] = {}
        self._lock = threading.Lock()

    def put(self, key: K, value: V) -> None:
        self._store[key] = value

    def get(self, key: K) -> V | None:
        return self._store.get(key)

    def delete(self, key: K) -> None:
        with self._lock:
            self._store.pop(key, None)
            unique_key = self._unique_by_key.pop(key, None)
            if unique_key is not None:
                self._unique.pop(unique_key, None)

    def all(self) -> list[V]:
        return list(self._store.values())

    def find(self, predicate: Callable[[V], bool]) -> list[V]:
        return [v for v in self._store.values() if predicate(v)]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._unique.clear()
            self._unique_by_key.clear()

    def __iter__(self) -> Iterator[V]:
        return iter(self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def insert_unique(self, key: K, value: V, unique_key: Hashable) -> None:
        """
        Insert a value unless its unique key is already taken.
        Check and write happen under one lock, so concurrent inserts for the
        same unique key cannot both succeed.
        """
        with self._lock:
            existing = self._unique.get(unique_key)
            if existing is not None:
                raise UniqueConstraintError(unique_key, existing)
            self._unique[unique_key] = key
            self._unique_by_key[key] = unique_key
            self._store[key] = value

    def insert_many_unique(
        self, rows: Iterable[tuple[K, V, Hashable]]
    ) -> tuple[int, int]:
        """
        Insert-or-ignore for a batch of rows.
        Returns (inserted, skipped).
        """
        inserted = 0
        skipped = 0
        for key, value, unique_key in rows:
            try:
                self.insert_unique(key, value, unique_key)
            except UniqueConstraintError:
                skipped += 1
            else:
                inserted += 1
        return inserted, skipped
