"""Tests for engine and session management."""

from collections.abc import Generator

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from ddd_toolkit import database
from ddd_toolkit.config import Settings


@pytest.fixture
def sqlite_settings() -> Settings:
    return Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:")


@pytest.fixture(autouse=True)
def reset_engine() -> Generator[None, None, None]:
    database.dispose_engine()
    yield
    database.dispose_engine()


def test_get_engine_before_initialization_fails() -> None:
    with pytest.raises(RuntimeError, match="not initialized"):
        database.get_engine()


def test_sqlite_engine_uses_static_pool(sqlite_settings: Settings) -> None:
    engine = database.create_database_engine(sqlite_settings)
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_session_factory_is_a_singleton(sqlite_settings: Settings) -> None:
    factory = database.get_session_factory(sqlite_settings)

    assert database.get_session_factory() is factory
    assert database.get_engine() is factory.kw["bind"]


def test_session_scope_yields_working_session(sqlite_settings: Settings) -> None:
    with database.session_scope(sqlite_settings) as db:
        assert db.execute(text("SELECT 1")).scalar() == 1


def test_dispose_engine_forgets_singletons(sqlite_settings: Settings) -> None:
    database.initialize_database(sqlite_settings)

    database.dispose_engine()

    with pytest.raises(RuntimeError):
        database.get_engine()
