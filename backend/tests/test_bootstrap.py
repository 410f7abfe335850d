import logging

from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from cronograma.db import bootstrap


def _memory_engine():
    return create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def test_runtime_schema_creates_missing_tables():
    engine = _memory_engine()
    missing_tables, _ = bootstrap.missing_schema(engine)
    assert "schedule_events" in missing_tables

    bootstrap.ensure_runtime_schema(engine)

    assert bootstrap.missing_schema(engine) == ([], {})


def test_runtime_schema_warns_about_column_drift(caplog):
    engine = _memory_engine()
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE careers (id VARCHAR(36) PRIMARY KEY, name VARCHAR(200) NOT NULL)"))

    with caplog.at_level(logging.WARNING, logger="cronograma.db.bootstrap"):
        bootstrap.ensure_runtime_schema(engine)

    missing_tables, missing_columns = bootstrap.missing_schema(engine)
    assert missing_tables == []
    assert missing_columns == {"careers": ["created_at", "updated_at"]}
    assert "alembic upgrade head" in caplog.text
