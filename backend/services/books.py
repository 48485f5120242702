"""
Book catalog operations.

Each function opens one store session, so every check-then-write sequence
(title uniqueness, id allocation, existence checks) runs atomically with
respect to other requests.
"""
import logging
from typing import List, Tuple

from domain.errors import BookNotFoundError, DuplicateTitleError
from domain.models import Book
from repositories import BooksRepository, RecordStore

logger = logging.getLogger(__name__)
books_repo = BooksRepository()


def create_book(store: RecordStore, title: str, author: str) -> Tuple[int, Book]:
    """Store a new book under a fresh id. Titles must be unique."""
    with store.session() as session:
        existing_id = books_repo.find_by_title(session, title)
        if existing_id is not None:
            logger.info("Rejected create: title %r already stored as id %s", title, existing_id)
            raise DuplicateTitleError(title)
        book = Book(title=title, author=author)
        book_id = books_repo.create_book(session, book)
    logger.info("Created book %s (%r by %r)", book_id, title, author)
    return book_id, book


def list_books(store: RecordStore) -> List[Tuple[int, Book]]:
    with store.session() as session:
        return books_repo.list_books(session)


def get_book(store: RecordStore, book_id: int) -> Book:
    with store.session() as session:
        book = books_repo.get_book(session, book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def update_book(
    store: RecordStore,
    book_id: int,
    title: str,
    author: str,
    *,
    unique_title: bool = False,
) -> Book:
    """
    Replace the title and author of an existing book.

    By default the new title is not checked against other books. With
    ``unique_title`` set, a title already used by a different book is
    rejected with DuplicateTitleError; keeping the book's own title is
    always allowed.
    """
    with store.session() as session:
        if books_repo.get_book(session, book_id) is None:
            logger.info("Rejected update: book %s not found", book_id)
            raise BookNotFoundError(book_id)
        if unique_title:
            existing_id = books_repo.find_by_title(session, title, exclude_id=book_id)
            if existing_id is not None:
                logger.info("Rejected update of %s: title %r used by id %s", book_id, title, existing_id)
                raise DuplicateTitleError(title)
        book = books_repo.update_book(session, book_id, Book(title=title, author=author))
    logger.info("Updated book %s", book_id)
    return book


def delete_book(store: RecordStore, book_id: int) -> None:
    with store.session() as session:
        removed = books_repo.delete_book(session, book_id)
    if not removed:
        logger.info("Rejected delete: book %s not found", book_id)
        raise BookNotFoundError(book_id)
    logger.info("Deleted book %s", book_id)
