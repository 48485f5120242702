"""
Book repository backed by the in-memory record store.
"""
from typing import List, Optional, Tuple

from domain.models import Book
from repositories.store import StoreSession


class BooksRepository:
    """CRUD operations for books."""

    def list_books(self, session: StoreSession) -> List[Tuple[int, Book]]:
        return session.list()

    def get_book(self, session: StoreSession, book_id: int) -> Optional[Book]:
        return session.get(book_id)

    def find_by_title(
        self,
        session: StoreSession,
        title: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[int]:
        """Return the id of a book with exactly this title, if any (linear scan)."""
        for book_id, book in session.list():
            if book_id != exclude_id and book.title == title:
                return book_id
        return None

    def create_book(self, session: StoreSession, book: Book) -> int:
        book_id = session.next_id()
        session.insert(book_id, Book(title=book.title, author=book.author))
        return book_id

    def update_book(self, session: StoreSession, book_id: int, book: Book) -> Book:
        if not session.contains(book_id):
            raise ValueError("Book not found")
        stored = Book(title=book.title, author=book.author)
        session.insert(book_id, stored)
        return stored

    def delete_book(self, session: StoreSession, book_id: int) -> bool:
        return session.remove(book_id)
