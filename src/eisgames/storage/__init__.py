"""Storage module for EIS Games.

This module provides repository interfaces and implementations for the
content catalog and durable player progress.

Usage:
    from eisgames.storage import get_content_repository, get_progress_repository
    from eisgames.engine import SessionStore

    content = get_content_repository()
    progress = get_progress_repository()

    store = SessionStore.from_repository(progress, player_id="ada")
    store.start_case(content.get_case("broad-street-pump"))

Configuration via environment variables:
    EISGAMES_STORAGE_BACKEND: "file" or "sqlite" (default: "file")
    EISGAMES_CONTENT_PATH: Path to content directory (default: "content")
    EISGAMES_PROGRESS_PATH: Path to progress directory (default: "progress")
    EISGAMES_DATABASE_URI: SQLite database path (default: "instance/eisgames.db")
"""

from .config import (
    StorageBackend,
    get_content_path,
    get_content_repository,
    get_database_uri,
    get_progress_path,
    get_progress_repository,
    get_storage_backend,
)
from .file_repo import FileContentRepository, FileProgressRepository
from .hooks import persist_progress_hook
from .repository import ContentRepository, ProgressRepository
from .sqlite_repo import SQLiteProgressRepository

__all__ = [
    # Abstract interfaces
    "ContentRepository",
    "ProgressRepository",
    # File implementations
    "FileContentRepository",
    "FileProgressRepository",
    # SQLite implementations
    "SQLiteProgressRepository",
    # Persistence hook
    "persist_progress_hook",
    # Configuration
    "StorageBackend",
    "get_storage_backend",
    "get_content_path",
    "get_progress_path",
    "get_database_uri",
    # Factory functions
    "get_content_repository",
    "get_progress_repository",
]
