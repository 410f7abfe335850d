from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from cronograma.core.config import Settings, get_settings
from cronograma.db.session import SessionLocal
from cronograma.services.conflict_analyzer import ConflictAnalyzerClient


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_conflict_analyzer(settings: Settings = Depends(get_settings)) -> ConflictAnalyzerClient:
    return ConflictAnalyzerClient(settings)
