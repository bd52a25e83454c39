"""Storage configuration for EIS Games.

This module provides configuration for storage backends and factory functions
to create appropriate repository instances based on configuration.
"""

import os
from enum import Enum

from .file_repo import FileContentRepository, FileProgressRepository
from .repository import ContentRepository, ProgressRepository
from .sqlite_repo import SQLiteProgressRepository


class StorageBackend(Enum):
    """Available progress storage backends."""

    FILE = "file"
    SQLITE = "sqlite"


# Default configuration (can be overridden via environment variables)
DEFAULT_STORAGE_BACKEND = StorageBackend.FILE
DEFAULT_CONTENT_PATH = "content"
DEFAULT_PROGRESS_PATH = "progress"
DEFAULT_DATABASE_URI = "instance/eisgames.db"


def get_storage_backend() -> StorageBackend:
    """Get configured storage backend from environment.

    Returns:
        StorageBackend enum value
    """
    backend_str = os.environ.get("EISGAMES_STORAGE_BACKEND", "file").lower()
    if backend_str == "sqlite":
        return StorageBackend.SQLITE
    return StorageBackend.FILE


def get_content_path() -> str:
    """Get configured content path from environment."""
    return os.environ.get("EISGAMES_CONTENT_PATH", DEFAULT_CONTENT_PATH)


def get_progress_path() -> str:
    """Get configured progress path from environment."""
    return os.environ.get("EISGAMES_PROGRESS_PATH", DEFAULT_PROGRESS_PATH)


def get_database_uri() -> str:
    """Get configured database URI from environment."""
    return os.environ.get("EISGAMES_DATABASE_URI", DEFAULT_DATABASE_URI)


def get_content_repository() -> ContentRepository:
    """Factory function to create the content catalog."""
    return FileContentRepository(get_content_path())


def get_progress_repository(
    backend: StorageBackend | None = None,
) -> ProgressRepository:
    """Factory function to create progress repository.

    Args:
        backend: Storage backend to use. If None, uses environment config.

    Returns:
        ProgressRepository instance
    """
    if backend is None:
        backend = get_storage_backend()

    if backend == StorageBackend.SQLITE:
        return SQLiteProgressRepository(get_database_uri())
    return FileProgressRepository(get_progress_path())
