"""Domain exceptions raised by services and caught by the API layer.

Exception handlers in api/main.py translate them into the standard
response envelope: {"message": ..., "status": ..., "data": null}.
"""


class BookstoreError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateTitleError(BookstoreError):
    """Raised when a book with the same title is already stored."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"Title {title} sudah pernah ditambahkan")


class BookNotFoundError(BookstoreError):
    """Raised when a requested book id is not in the store."""

    def __init__(self, book_id: int) -> None:
        self.book_id = book_id
        super().__init__(f"Buku dengan id {book_id} tidak ditemukan")


class StorePoisonedError(BookstoreError):
    """Raised when the record store was left in an unknown state by a failed session."""

    def __init__(self) -> None:
        super().__init__("Penyimpanan buku tidak dapat digunakan")
