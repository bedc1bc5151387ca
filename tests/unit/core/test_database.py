"""Unit tests for database engine helpers."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from aml_registrar.core import database


@pytest.fixture(autouse=True)
def _fresh_engine(monkeypatch):
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_session_factory", None)


def test_get_engine_is_cached():
    engine = database.get_engine()
    assert database.get_engine() is engine
    assert engine.url.drivername == "postgresql+asyncpg"


def test_get_session_factory_is_cached():
    assert database.get_session_factory() is database.get_session_factory()


def _factory_for(session) -> MagicMock:
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


@pytest.mark.asyncio
async def test_session_scope_commits_on_success():
    session = AsyncMock()
    with patch.object(database, "get_session_factory", return_value=_factory_for(session)):
        async with database.session_scope() as scoped:
            assert scoped is session

    session.commit.assert_awaited_once()
    session.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_session_scope_rolls_back_on_error():
    session = AsyncMock()
    with patch.object(database, "get_session_factory", return_value=_factory_for(session)):
        with pytest.raises(RuntimeError):
            async with database.session_scope():
                raise RuntimeError("boom")

    session.rollback.assert_awaited_once()
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_engine_disposes_engine(monkeypatch):
    engine = AsyncMock()
    monkeypatch.setattr(database, "_engine", engine)

    await database.reset_engine()

    engine.dispose.assert_awaited_once()
    assert database._engine is None
    assert database._session_factory is None
