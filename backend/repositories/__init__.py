from .books import BooksRepository
from .store import RecordStore, StoreSession

__all__ = ["BooksRepository", "RecordStore", "StoreSession"]
