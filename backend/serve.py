"""
Process entry point: serve the API with uvicorn.

Usage: python serve.py  (from the backend directory), or the ``bookshelf-api`` script.
"""
import logging

import uvicorn

from api.main import app
from settings import settings

logger = logging.getLogger(__name__)


def main() -> None:
    logger.info("Server berjalan di port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
