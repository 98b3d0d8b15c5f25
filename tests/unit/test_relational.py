"""Tests for RelationalBackend with a mocked session factory."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.bb_common.errors import RemoteUnavailableError
from src.bb_persistence.infrastructure.relational import RelationalBackend
from src.bb_pricing.infrastructure.row_mappers import SizeListRowMapper


def _session_factory(db: AsyncMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = db
    factory.return_value.__aexit__.return_value = False
    return factory


def _result(rows: list) -> MagicMock:
    result = MagicMock()
    result.fetchall.return_value = rows
    return result


class TestRead:
    @pytest.mark.asyncio
    async def test_rows_are_mapped(self) -> None:
        db = AsyncMock()
        db.execute.return_value = _result([
            SimpleNamespace(billboard_size="5x13"),
            SimpleNamespace(billboard_size="3x4"),
        ])
        backend = RelationalBackend(_session_factory(db), SizeListRowMapper())

        assert await backend.read() == ["5x13", "3x4"]

    @pytest.mark.asyncio
    async def test_zero_rows_is_empty(self) -> None:
        db = AsyncMock()
        db.execute.return_value = _result([])
        backend = RelationalBackend(_session_factory(db), SizeListRowMapper())
        assert await backend.read() is None

    @pytest.mark.asyncio
    async def test_driver_error_is_unavailable(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("refused"))
        backend = RelationalBackend(_session_factory(db), SizeListRowMapper())
        with pytest.raises(RemoteUnavailableError) as exc_info:
            await backend.read()
        assert exc_info.value.tier == "relational"


class TestWriteFull:
    @pytest.mark.asyncio
    async def test_delete_insert_commit(self) -> None:
        db = AsyncMock()
        mapper = SizeListRowMapper()
        backend = RelationalBackend(_session_factory(db), mapper)

        await backend.write_full(["4x12", "3x4"])

        calls = db.execute.await_args_list
        assert calls[0].args == (mapper.delete_sql,)
        assert calls[1].args == (
            mapper.insert_sql,
            [
                {"billboard_size": "4x12", "position": 0},
                {"billboard_size": "3x4", "position": 1},
            ],
        )
        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back(self) -> None:
        db = AsyncMock()
        db.execute.side_effect = [None, OperationalError("INSERT", {}, Exception("boom"))]
        backend = RelationalBackend(_session_factory(db), SizeListRowMapper())

        with pytest.raises(RemoteUnavailableError):
            await backend.write_full(["4x12"])
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_row_set_is_a_failure(self) -> None:
        db = AsyncMock()
        backend = RelationalBackend(_session_factory(db), SizeListRowMapper())
        with pytest.raises(RemoteUnavailableError) as exc_info:
            await backend.write_full([])
        assert "rows to insert is empty" in exc_info.value.message
        db.execute.assert_not_awaited()


class TestPing:
    @pytest.mark.asyncio
    async def test_ping(self) -> None:
        db = AsyncMock()
        assert await RelationalBackend(_session_factory(db), SizeListRowMapper()).ping() is True

    @pytest.mark.asyncio
    async def test_ping_connection_refused(self) -> None:
        factory = MagicMock()
        factory.return_value.__aenter__.side_effect = OSError("refused")
        assert await RelationalBackend(factory, SizeListRowMapper()).ping() is False
