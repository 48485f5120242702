"""
FastAPI application entry point.

Run with: uvicorn api.main:app --port 8080
"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import books
from api.routes.books import ResponseEnvelope
from domain.errors import BookNotFoundError, BookstoreError, DuplicateTitleError, StorePoisonedError
from repositories import RecordStore
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

MSG_INVALID_REQUEST = "Permintaan tidak valid"
MSG_NOT_FOUND = "Halaman tidak ditemukan"

ERROR_STATUS = {
    DuplicateTitleError: status.HTTP_400_BAD_REQUEST,
    BookNotFoundError: status.HTTP_404_NOT_FOUND,
    StorePoisonedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def envelope_response(status_code: int, message: str) -> JSONResponse:
    """Error envelope with no payload."""
    body = ResponseEnvelope[None](message=message, status=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def bookstore_error_handler(request: Request, exc: BookstoreError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return envelope_response(status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # A malformed id in the path means the route does not exist for it.
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return envelope_response(status.HTTP_404_NOT_FOUND, MSG_NOT_FOUND)
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors())
    return envelope_response(status.HTTP_400_BAD_REQUEST, MSG_INVALID_REQUEST)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = MSG_NOT_FOUND if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
    response = envelope_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def create_app(store: Optional[RecordStore] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around a record store. A fresh store is created when none is given."""
    app = FastAPI(
        title="Bookshelf API",
        description="In-memory CRUD service for book records",
        version="0.1.0",
    )
    app.state.store = store if store is not None else RecordStore()
    app.state.settings = app_settings if app_settings is not None else default_settings

    app.add_exception_handler(BookstoreError, bookstore_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(books.router, prefix="/book", tags=["books"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()
