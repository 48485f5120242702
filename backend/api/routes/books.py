"""
Books API routes.

Route functions are plain ``def`` so FastAPI runs them in its threadpool;
store access blocks on the store lock.
"""
from typing import Generic, List, Optional, TypeVar

from fastapi import APIRouter, Depends, Path, Request, status
from pydantic import BaseModel

from domain.models import Book
from repositories import RecordStore
from services import books as books_service
from settings import Settings

router = APIRouter()

T = TypeVar("T")

MSG_CREATED = "Berhasil menambahkan buku baru"
MSG_LISTED = "Berhasil mendapatkan semua buku"
MSG_FOUND = "Berhasil mendapatkan data buku"
MSG_UPDATED = "Berhasil mengupdate data buku"
MSG_DELETED = "Buku dengan id {book_id} berhasil dihapus"


class BookPayload(BaseModel):
    title: str
    author: str


class BookView(BaseModel):
    id: int
    title: str
    author: str


class ResponseEnvelope(BaseModel, Generic[T]):
    """Wrapper used for every API response, success or failure."""
    message: str
    status: int
    data: Optional[T] = None


def book_to_view(book_id: int, book: Book) -> BookView:
    """Convert a stored Book and its key to the API projection."""
    return BookView(id=book_id, title=book.title, author=book.author)


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.post(
    "",
    response_model=ResponseEnvelope[BookView],
    status_code=status.HTTP_201_CREATED,
)
def create_book(data: BookPayload, store: RecordStore = Depends(get_store)):
    """Create a new book with a unique title."""
    book_id, book = books_service.create_book(store, data.title, data.author)
    return ResponseEnvelope[BookView](
        message=MSG_CREATED,
        status=status.HTTP_201_CREATED,
        data=book_to_view(book_id, book),
    )


@router.get("", response_model=ResponseEnvelope[List[BookView]])
def list_books(store: RecordStore = Depends(get_store)):
    """List all books."""
    views = [book_to_view(book_id, book) for book_id, book in books_service.list_books(store)]
    return ResponseEnvelope[List[BookView]](
        message=MSG_LISTED,
        status=status.HTTP_200_OK,
        data=views,
    )


@router.get("/{book_id}", response_model=ResponseEnvelope[BookView])
def get_book(book_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)):
    """Get a book by ID."""
    book = books_service.get_book(store, book_id)
    return ResponseEnvelope[BookView](
        message=MSG_FOUND,
        status=status.HTTP_200_OK,
        data=book_to_view(book_id, book),
    )


@router.patch("/{book_id}", response_model=ResponseEnvelope[BookView])
def update_book(
    data: BookPayload,
    book_id: int = Path(..., gt=0),
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Replace the title and author of a book."""
    book = books_service.update_book(
        store,
        book_id,
        data.title,
        data.author,
        unique_title=settings.UNIQUE_TITLE_ON_UPDATE,
    )
    return ResponseEnvelope[BookView](
        message=MSG_UPDATED,
        status=status.HTTP_200_OK,
        data=book_to_view(book_id, book),
    )


@router.delete(
    "/{book_id}",
    response_model=ResponseEnvelope[None],
    status_code=status.HTTP_202_ACCEPTED,
)
def delete_book(book_id: int = Path(..., gt=0), store: RecordStore = Depends(get_store)):
    """Delete a book."""
    books_service.delete_book(store, book_id)
    return ResponseEnvelope[None](
        message=MSG_DELETED.format(book_id=book_id),
        status=status.HTTP_202_ACCEPTED,
    )
