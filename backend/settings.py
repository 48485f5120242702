import os

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


class Settings:
    def __init__(self) -> None:
        self.HOST: str = os.getenv("BOOKSTORE_HOST", "127.0.0.1")
        self.PORT: int = _as_int(os.getenv("BOOKSTORE_PORT"), 8080)
        self.LOG_LEVEL: str = os.getenv("BOOKSTORE_LOG_LEVEL", "INFO").upper()
        self.UNIQUE_TITLE_ON_UPDATE: bool = _as_bool(os.getenv("BOOKSTORE_UNIQUE_TITLE_ON_UPDATE"), False)


settings = Settings()
