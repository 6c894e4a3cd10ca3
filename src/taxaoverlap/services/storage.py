"""Local key-value store.

Holds four independent string values: the saved credential, the
language preference, the serialized reference pool and its metadata.
Backed by a single SQLite table; pool and metadata are written together
through ``set_many`` so a reader never sees one without the other.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from taxaoverlap.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from taxaoverlap.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


class KeyValueStore(Protocol):
    """String key-value store used for persisted session state."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def remove_many(self, keys: list[str]) -> None: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...


class SQLiteKeyValueStore:
    """SQLite-backed KeyValueStore.

    Attributes:
        db_path: Path to the SQLite database file

    Example:
        >>> store = SQLiteKeyValueStore(Path("store.db"))
        >>> store.set("tmdb_lang_v1", "da-DK")
        >>> store.get("tmdb_lang_v1")
        'da-DK'
    """

    def __init__(self, db_path: Path | str) -> None:
        """Open (and create if needed) the store.

        Args:
            db_path: Path to SQLite database file, or ":memory:"

        Raises:
            InfrastructureError: If the database cannot be opened
        """
        self.db_path = Path(db_path) if db_path != ":memory:" else None
        self._conn = self._connect(db_path)

    def _connect(self, db_path: Path | str) -> sqlite3.Connection:
        context = ErrorContext(
            operation="open_store",
            additional_data={"db_path": str(db_path)},
        )
        try:
            db_is_new = False
            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                db_is_new = not self.db_path.exists()

            conn = sqlite3.connect(
                str(db_path),
                check_same_thread=False,
                isolation_level=None,  # Auto-commit mode
            )
            conn.execute(_SCHEMA)

            # The store holds the TMDB credential: owner read/write only
            if db_is_new and self.db_path is not None:
                _restrict_permissions(self.db_path)

            return conn
        except (sqlite3.Error, OSError) as e:
            error = InfrastructureError(
                ErrorCode.STORAGE_ERROR,
                f"Failed to open local store: {e!s}",
                context,
                e,
            )
            log_operation_error(logger, error)
            raise error from e

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None.

        Raises:
            InfrastructureError: If the read fails
        """
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise self._error(ErrorCode.STORAGE_ERROR, "get", key, e) from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        """Store several values in one transaction: all or none are written.

        Raises:
            InfrastructureError: If the write fails; nothing is written then
        """
        try:
            with self._transaction():
                self._conn.executemany(
                    "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                    list(items.items()),
                )
        except sqlite3.Error as e:
            raise self._error(
                ErrorCode.STORAGE_WRITE_FAILED, "set", ",".join(items), e
            ) from e

    def remove(self, key: str) -> None:
        """Delete key; removing a missing key is not an error."""
        self.remove_many([key])

    def remove_many(self, keys: list[str]) -> None:
        """Delete several keys in one transaction."""
        try:
            with self._transaction():
                self._conn.executemany("DELETE FROM kv WHERE key = ?", [(k,) for k in keys])
        except sqlite3.Error as e:
            raise self._error(
                ErrorCode.STORAGE_WRITE_FAILED, "remove", ",".join(keys), e
            ) from e

    def close(self) -> None:
        self._conn.close()

    def _transaction(self) -> _Transaction:
        return _Transaction(self._conn)

    def _error(
        self,
        code: ErrorCode,
        operation: str,
        key: str,
        original: Exception,
    ) -> InfrastructureError:
        return InfrastructureError(
            code,
            f"Local store {operation} failed: {original!s}",
            ErrorContext(operation=f"store_{operation}", additional_data={"key": key}),
            original,
        )


class _Transaction:
    """Explicit BEGIN/COMMIT on an auto-commit connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def __enter__(self) -> sqlite3.Connection:
        self._conn.execute("BEGIN")
        return self._conn

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self._conn.execute("COMMIT")
        else:
            self._conn.execute("ROLLBACK")


def _restrict_permissions(db_path: Path) -> None:
    try:
        db_path.chmod(0o600)
    except OSError as e:
        logger.warning("Failed to set permissions on %s: %s", db_path, e)


__all__ = ["KeyValueStore", "SQLiteKeyValueStore"]
