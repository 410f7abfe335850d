from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from cronograma.db.base import Base
import cronograma.models  # noqa: F401

logger = logging.getLogger(__name__)


def missing_schema(engine: Engine) -> tuple[list[str], dict[str, list[str]]]:
    """Tables and columns declared by the models but absent from the database."""
    inspector = inspect(engine)
    table_names = set(inspector.get_table_names())
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    for table in Base.metadata.sorted_tables:
        if table.name not in table_names:
            missing_tables.append(table.name)
            continue
        existing = {item["name"] for item in inspector.get_columns(table.name)}
        missing = sorted(column.name for column in table.columns if column.name not in existing)
        if missing:
            missing_columns[table.name] = missing
    return missing_tables, missing_columns


def ensure_runtime_schema(engine: Engine) -> None:
    missing_tables, _ = missing_schema(engine)
    if missing_tables:
        logger.info("Creating missing tables: %s", ", ".join(missing_tables))
        Base.metadata.create_all(bind=engine)

    _, missing_columns = missing_schema(engine)
    for table_name, columns in missing_columns.items():
        # Column drift needs a migration; create_all never alters existing tables.
        logger.warning(
            "Table %s is missing column(s) %s. Run `alembic upgrade head`.",
            table_name,
            ", ".join(columns),
        )
