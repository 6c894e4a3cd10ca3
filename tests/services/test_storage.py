"""Tests for the SQLite key-value store."""

import sqlite3
import stat
import sys

import pytest

from taxaoverlap.services.storage import SQLiteKeyValueStore
from taxaoverlap.shared.errors import ErrorCode, InfrastructureError


class TestSQLiteKeyValueStore:
    """Test SQLiteKeyValueStore."""

    def test_set_get_remove(self, sqlite_store):
        """Test basic operations."""
        assert sqlite_store.get("tmdb_lang_v1") is None

        sqlite_store.set("tmdb_lang_v1", "da-DK")
        assert sqlite_store.get("tmdb_lang_v1") == "da-DK"

        sqlite_store.set("tmdb_lang_v1", "en-US")
        assert sqlite_store.get("tmdb_lang_v1") == "en-US"

        sqlite_store.remove("tmdb_lang_v1")
        assert sqlite_store.get("tmdb_lang_v1") is None

    def test_remove_missing_key(self, sqlite_store):
        """Test that removing an absent key is not an error."""
        sqlite_store.remove("missing")

    def test_set_many_and_remove_many(self, sqlite_store):
        """Test multi-key writes and deletes."""
        sqlite_store.set_many({"a": "1", "b": "2", "c": "3"})
        sqlite_store.remove_many(["a", "b"])

        assert sqlite_store.get("a") is None
        assert sqlite_store.get("b") is None
        assert sqlite_store.get("c") == "3"

    def test_set_many_is_atomic(self, sqlite_store):
        """Test that a failing multi-key write leaves nothing behind."""
        sqlite_store.set("a", "old")

        with pytest.raises(InfrastructureError) as exc_info:
            sqlite_store.set_many({"a": "1", "b": None})

        assert exc_info.value.code is ErrorCode.STORAGE_WRITE_FAILED
        assert sqlite_store.get("a") == "old"
        assert sqlite_store.get("b") is None

    def test_persists_across_instances(self, tmp_path):
        """Test that values survive reopening the database file."""
        db_path = tmp_path / "nested" / "store.db"
        first = SQLiteKeyValueStore(db_path)
        first.set("tmdb_auth_v1", "secret")
        first.close()

        second = SQLiteKeyValueStore(db_path)
        try:
            assert second.get("tmdb_auth_v1") == "secret"
        finally:
            second.close()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_new_file_is_private(self, tmp_path):
        """Test that a new store file is readable by its owner only."""
        db_path = tmp_path / "store.db"
        SQLiteKeyValueStore(db_path).close()

        assert stat.S_IMODE(db_path.stat().st_mode) == 0o600

    def test_in_memory(self):
        """Test the in-memory database."""
        store = SQLiteKeyValueStore(":memory:")
        store.set("k", "v")

        assert store.get("k") == "v"
        assert store.db_path is None
        store.close()

    def test_read_failure(self, sqlite_store):
        """Test that a read on a closed store raises InfrastructureError."""
        sqlite_store.close()

        with pytest.raises(InfrastructureError) as exc_info:
            sqlite_store.get("k")

        assert exc_info.value.code is ErrorCode.STORAGE_ERROR
        assert isinstance(exc_info.value.original_error, sqlite3.Error)

    def test_open_failure(self, tmp_path):
        """Test that an unopenable path raises InfrastructureError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(InfrastructureError) as exc_info:
            SQLiteKeyValueStore(blocker / "store.db")

        assert exc_info.value.code is ErrorCode.STORAGE_ERROR
