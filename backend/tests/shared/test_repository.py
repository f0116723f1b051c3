"""Tests for shared/repository.py."""

from typing import Optional
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, NO_ROWS_CODE


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the database client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_subclass_can_access_db(self):
        """Subclass should be able to access _db and use it."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute.return_value.data = [
            {"id": "123", "name": "test"}
        ]

        class TestRepository(BaseRepository[dict]):
            def get_all(self) -> list[dict]:
                result = self._db.table("test").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)
        result = repo.get_all()

        assert result == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")

    def test_error_code_reads_postgrest_code(self):
        """error_code should expose the PostgREST error code."""
        error = APIError({"message": "no rows", "code": NO_ROWS_CODE, "hint": None, "details": None})
        assert BaseRepository.error_code(error) == NO_ROWS_CODE

    def test_error_code_missing(self):
        """error_code should be None when the error carries no code."""
        error = APIError({"message": "boom"})
        code: Optional[str] = BaseRepository.error_code(error)
        assert code is None
