from quietseed.core.config import Settings
from quietseed.storage.base import (
    ALL_CATEGORIES,
    DuplicateError,
    InvalidFieldError,
    Storage,
    StorageError,
)
from quietseed.storage.database import DatabaseStorage
from quietseed.storage.memory import MemStorage

__all__ = [
    "ALL_CATEGORIES",
    "DatabaseStorage",
    "DuplicateError",
    "InvalidFieldError",
    "MemStorage",
    "Storage",
    "StorageError",
    "build_storage",
]


def build_storage(config: Settings) -> Storage:
    """Construct the store selected by ``STORAGE_BACKEND``."""
    from quietseed.db.session import create_db_and_tables, make_engine

    backend = config.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemStorage()
    if backend == "database":
        engine = make_engine(config.DATABASE_URL)
        create_db_and_tables(engine)
        return DatabaseStorage(engine)
    raise ValueError(f"Unknown STORAGE_BACKEND {config.STORAGE_BACKEND!r}")
