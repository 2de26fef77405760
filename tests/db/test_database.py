"""Unit tests for src/db/database.py"""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from src.core.config import Settings
from src.db.database import create_session_factory, get_db


def test_session_factory_creates_tables() -> None:
    settings = Settings(database_url="sqlite:///:memory:")
    session_factory = create_session_factory(settings)
    with session_factory() as db:
        assert "positions" in inspect(db.get_bind()).get_table_names()


def test_get_db_closes_session() -> None:
    session_factory = create_session_factory(Settings(database_url="sqlite:///:memory:"))
    generator = get_db(session_factory)
    db = next(generator)
    assert isinstance(db, Session)
    generator.close()
