from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.classroom import Classroom
from cronograma.schemas.classroom import ClassroomCreate, ClassroomOut, ClassroomUpdate

router = APIRouter()


@router.get("/", response_model=list[ClassroomOut])
def list_classrooms(db: Session = Depends(get_db)) -> list[ClassroomOut]:
    return list(db.execute(select(Classroom).order_by(Classroom.name)).scalars())


@router.post("/", response_model=ClassroomOut, status_code=status.HTTP_201_CREATED)
def create_classroom(payload: ClassroomCreate, db: Session = Depends(get_db)) -> ClassroomOut:
    existing = db.execute(select(Classroom).where(Classroom.name == payload.name)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Classroom name already exists")
    classroom = Classroom(**payload.model_dump())
    db.add(classroom)
    db.commit()
    db.refresh(classroom)
    return classroom


@router.put("/{classroom_id}", response_model=ClassroomOut)
def update_classroom(classroom_id: str, payload: ClassroomUpdate, db: Session = Depends(get_db)) -> ClassroomOut:
    classroom = db.get(Classroom, classroom_id)
    if classroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classroom not found")

    # description may be cleared; the other columns are NOT NULL.
    data = {
        key: value
        for key, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or key == "description"
    }
    if "name" in data:
        existing = db.execute(
            select(Classroom).where(Classroom.name == data["name"], Classroom.id != classroom_id)
        ).scalar_one_or_none()
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Classroom name already exists")

    for key, value in data.items():
        setattr(classroom, key, value)
    db.commit()
    db.refresh(classroom)
    return classroom


@router.delete("/{classroom_id}")
def delete_classroom(classroom_id: str, db: Session = Depends(get_db)) -> dict:
    classroom = db.get(Classroom, classroom_id)
    if classroom is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Classroom not found")
    db.delete(classroom)
    db.commit()
    return {"success": True}
