"""
Tests for the book catalog operations, called without the HTTP layer.
"""
import threading

import pytest

from domain.errors import BookNotFoundError, DuplicateTitleError
from repositories import RecordStore
from services import books as books_service


def _size(store: RecordStore) -> int:
    with store.session() as session:
        return len(session)


def test_create_assigns_sequential_positive_ids(store):
    first_id, _ = books_service.create_book(store, "Dune", "Herbert")
    second_id, _ = books_service.create_book(store, "Emma", "Austen")
    assert first_id == 1
    assert second_id == 2


def test_created_book_is_readable(store):
    book_id, _ = books_service.create_book(store, "Dune", "Herbert")
    book = books_service.get_book(store, book_id)
    assert book.title == "Dune"
    assert book.author == "Herbert"


def test_duplicate_title_is_rejected_without_mutation(store):
    books_service.create_book(store, "Dune", "Herbert")
    with pytest.raises(DuplicateTitleError) as excinfo:
        books_service.create_book(store, "Dune", "Someone Else")
    assert "Dune" in excinfo.value.message
    assert _size(store) == 1
    assert books_service.get_book(store, 1).author == "Herbert"


def test_title_match_is_case_sensitive(store):
    books_service.create_book(store, "Dune", "Herbert")
    books_service.create_book(store, "dune", "Herbert")
    assert _size(store) == 2


def test_list_returns_every_created_book(store):
    created = {("Dune", "Herbert"), ("Emma", "Austen"), ("Ulysses", "Joyce")}
    for title, author in created:
        books_service.create_book(store, title, author)

    listed = books_service.list_books(store)
    assert len(listed) == 3
    assert {(b.title, b.author) for _, b in listed} == created
    assert len({book_id for book_id, _ in listed}) == 3


def test_get_missing_book_raises_not_found(store):
    with pytest.raises(BookNotFoundError) as excinfo:
        books_service.get_book(store, 42)
    assert excinfo.value.book_id == 42


def test_update_replaces_title_and_author(store):
    book_id, _ = books_service.create_book(store, "T", "A")
    updated = books_service.update_book(store, book_id, "T2", "A2")
    assert (updated.title, updated.author) == ("T2", "A2")
    stored = books_service.get_book(store, book_id)
    assert (stored.title, stored.author) == ("T2", "A2")


def test_update_missing_book_raises_not_found(store):
    with pytest.raises(BookNotFoundError):
        books_service.update_book(store, 5, "T", "A")
    assert _size(store) == 0


def test_update_allows_duplicate_title_by_default(store):
    books_service.create_book(store, "Dune", "Herbert")
    other_id, _ = books_service.create_book(store, "Emma", "Austen")
    books_service.update_book(store, other_id, "Dune", "Austen")
    titles = [b.title for _, b in books_service.list_books(store)]
    assert titles.count("Dune") == 2


def test_update_with_unique_title_rejects_other_books_title(store):
    books_service.create_book(store, "Dune", "Herbert")
    other_id, _ = books_service.create_book(store, "Emma", "Austen")
    with pytest.raises(DuplicateTitleError):
        books_service.update_book(store, other_id, "Dune", "Austen", unique_title=True)
    assert books_service.get_book(store, other_id).title == "Emma"


def test_update_with_unique_title_keeps_own_title(store):
    book_id, _ = books_service.create_book(store, "Dune", "Herbert")
    updated = books_service.update_book(store, book_id, "Dune", "Frank Herbert", unique_title=True)
    assert updated.author == "Frank Herbert"


def test_delete_then_get_is_not_found(store):
    book_id, _ = books_service.create_book(store, "Dune", "Herbert")
    books_service.delete_book(store, book_id)
    with pytest.raises(BookNotFoundError):
        books_service.get_book(store, book_id)


def test_delete_missing_book_leaves_store_unchanged(store):
    books_service.create_book(store, "Dune", "Herbert")
    with pytest.raises(BookNotFoundError):
        books_service.delete_book(store, 99)
    assert _size(store) == 1


def test_ids_are_not_reused_after_deleting_newest(store):
    books_service.create_book(store, "A", "a")
    second_id, _ = books_service.create_book(store, "B", "b")
    books_service.delete_book(store, second_id)
    third_id, _ = books_service.create_book(store, "C", "c")
    assert third_id == 3


def test_concurrent_creates_of_same_title_admit_exactly_one(store):
    barrier = threading.Barrier(8)
    outcomes = []
    outcomes_lock = threading.Lock()

    def worker(n):
        barrier.wait(timeout=5)
        try:
            books_service.create_book(store, "Dune", f"author-{n}")
            result = "created"
        except DuplicateTitleError:
            result = "duplicate"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert outcomes.count("created") == 1
    assert outcomes.count("duplicate") == 7
    assert _size(store) == 1


def test_concurrent_creates_of_distinct_titles_get_distinct_ids(store):
    ids = []
    ids_lock = threading.Lock()

    def worker(n):
        book_id, _ = books_service.create_book(store, f"title-{n}", "author")
        with ids_lock:
            ids.append(book_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert sorted(ids) == list(range(1, 21))
