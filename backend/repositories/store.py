"""
In-memory record store.

Holds every book keyed by its integer id. All access goes through
``RecordStore.session()``, which holds a single lock for the whole
read-modify-write sequence performed by the caller.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from domain.errors import BookstoreError, StorePoisonedError
from domain.models import Book

logger = logging.getLogger(__name__)


class StoreSession:
    """View of the store handed out while its lock is held."""

    def __init__(self, store: "RecordStore"):
        self._store = store

    def insert(self, book_id: int, book: Book) -> None:
        """Insert or overwrite the entry at ``book_id``."""
        self._store._books[book_id] = book
        if book_id > self._store._last_id:
            self._store._last_id = book_id

    def get(self, book_id: int) -> Optional[Book]:
        return self._store._books.get(book_id)

    def list(self) -> List[Tuple[int, Book]]:
        """Snapshot of all entries. Order is not part of the contract."""
        return list(self._store._books.items())

    def remove(self, book_id: int) -> bool:
        """Delete the entry if present. Returns False when there was nothing to delete."""
        return self._store._books.pop(book_id, None) is not None

    def contains(self, book_id: int) -> bool:
        return book_id in self._store._books

    def next_id(self) -> int:
        """
        Id for the next new entry.

        One more than the highest id ever inserted, so deleting the newest
        book never causes its id to be handed out again.
        """
        return self._store._last_id + 1

    def __len__(self) -> int:
        return len(self._store._books)


class RecordStore:
    """
    Process-scoped store of books.

    Sessions are exclusive: readers and writers block each other. If an
    unexpected exception escapes a session the store is marked poisoned,
    since the map may have been left half-updated, and every later session
    raises StorePoisonedError.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._books: Dict[int, Book] = {}
        self._last_id = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @contextmanager
    def session(self) -> Iterator[StoreSession]:
        with self._lock:
            if self._poisoned:
                logger.error("Refusing store access: store was poisoned by an earlier failure")
                raise StorePoisonedError()
            try:
                yield StoreSession(self)
            except BookstoreError:
                raise
            except Exception:
                self._poisoned = True
                logger.exception("Store session failed; marking store as poisoned")
                raise
