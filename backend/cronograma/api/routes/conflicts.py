from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cronograma.api.deps import get_conflict_analyzer, get_db
from cronograma.core.config import Settings, get_settings
from cronograma.schemas.conflict import ConflictAnalysisOut, ConflictAnalysisRequest, ScheduleAuditReport
from cronograma.services.conflict_analyzer import ConflictAnalyzerClient, serialize_schedule
from cronograma.services.conflict_detector import detect_schedule_conflicts
from cronograma.services.snapshot import load_snapshot

router = APIRouter()


@router.get("/audit", response_model=ScheduleAuditReport)
def audit_schedule(db: Session = Depends(get_db)) -> ScheduleAuditReport:
    return detect_schedule_conflicts(load_snapshot(db))


@router.post("/analyze", response_model=ConflictAnalysisOut)
def analyze_schedule(
    payload: ConflictAnalysisRequest,
    db: Session = Depends(get_db),
    analyzer: ConflictAnalyzerClient = Depends(get_conflict_analyzer),
    settings: Settings = Depends(get_settings),
) -> ConflictAnalysisOut:
    snapshot = load_snapshot(db)
    schedule_data = payload.schedule_data or serialize_schedule(snapshot)
    priorities = payload.constraint_priorities or settings.default_constraint_priorities
    analysis = analyzer.analyze(schedule_data, priorities)
    return ConflictAnalysisOut(analysis=analysis, audit=detect_schedule_conflicts(snapshot))
