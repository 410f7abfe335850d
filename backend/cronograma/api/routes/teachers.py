from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.module import Module
from cronograma.models.teacher import Teacher, TeacherStatus
from cronograma.schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from cronograma.services.audit import log_activity
from cronograma.services.workload import resolve_max_weekly_hours

router = APIRouter()


def _require_modules(db: Session, module_ids: list[str]) -> None:
    if not module_ids:
        return
    known = set(db.execute(select(Module.id).where(Module.id.in_(module_ids))).scalars())
    unknown = [module_id for module_id in module_ids if module_id not in known]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown module id(s) in specialties: {', '.join(unknown)}",
        )


@router.get("/", response_model=list[TeacherOut])
def list_teachers(
    status_filter: TeacherStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> list[TeacherOut]:
    query = select(Teacher).order_by(Teacher.name)
    if status_filter is not None:
        query = query.where(Teacher.status == status_filter)
    return list(db.execute(query).scalars())


@router.get("/{teacher_id}", response_model=TeacherOut)
def get_teacher(teacher_id: str, db: Session = Depends(get_db)) -> TeacherOut:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return teacher


@router.post("/", response_model=TeacherOut, status_code=status.HTTP_201_CREATED)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)) -> TeacherOut:
    existing = db.execute(select(Teacher).where(Teacher.email == payload.email)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Teacher email already exists")
    _require_modules(db, payload.specialties)
    data = payload.model_dump()
    data["max_weekly_hours"] = resolve_max_weekly_hours(payload.contract_type, payload.max_weekly_hours)
    teacher = Teacher(**data)
    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    return teacher


@router.put("/{teacher_id}", response_model=TeacherOut)
def update_teacher(teacher_id: str, payload: TeacherUpdate, db: Session = Depends(get_db)) -> TeacherOut:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")

    data = payload.model_dump(exclude_unset=True)
    # An explicit null maximum means "back to the contract default"; other nulls leave the field alone.
    reset_hours = "max_weekly_hours" in data and data["max_weekly_hours"] is None
    data = {key: value for key, value in data.items() if value is not None}
    if "email" in data:
        existing = db.execute(
            select(Teacher).where(Teacher.email == data["email"], Teacher.id != teacher_id)
        ).scalar_one_or_none()
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Teacher email already exists")
    if "specialties" in data:
        _require_modules(db, data["specialties"])
    if reset_hours:
        data["max_weekly_hours"] = resolve_max_weekly_hours(data.get("contract_type", teacher.contract_type), None)

    for key, value in data.items():
        setattr(teacher, key, value)
    db.commit()
    db.refresh(teacher)
    return teacher


@router.delete("/{teacher_id}")
def delete_teacher(
    teacher_id: str,
    hard: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> dict:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    if hard:
        # Existing schedule events keep pointing at this id.
        db.delete(teacher)
    else:
        teacher.status = TeacherStatus.inactive
    log_activity(
        db,
        action="teacher.delete" if hard else "teacher.deactivate",
        entity_type="teacher",
        entity_id=teacher_id,
    )
    db.commit()
    return {"success": True, "hard": hard}
