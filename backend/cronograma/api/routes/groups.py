from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.career import Career
from cronograma.models.group import StudentGroup
from cronograma.schemas.group import GroupCreate, GroupOut, GroupUpdate

router = APIRouter()


def _require_career(db: Session, career_id: str) -> None:
    if db.get(Career, career_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Career not found")


@router.get("/", response_model=list[GroupOut])
def list_groups(db: Session = Depends(get_db)) -> list[GroupOut]:
    query = select(StudentGroup).order_by(StudentGroup.semester, StudentGroup.name)
    return list(db.execute(query).scalars())


@router.post("/", response_model=GroupOut, status_code=status.HTTP_201_CREATED)
def create_group(payload: GroupCreate, db: Session = Depends(get_db)) -> GroupOut:
    _require_career(db, payload.career_id)
    group = StudentGroup(**payload.model_dump())
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


@router.put("/{group_id}", response_model=GroupOut)
def update_group(group_id: str, payload: GroupUpdate, db: Session = Depends(get_db)) -> GroupOut:
    group = db.get(StudentGroup, group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    data = {key: value for key, value in payload.model_dump(exclude_unset=True).items() if value is not None}
    if "career_id" in data:
        _require_career(db, data["career_id"])
    for key, value in data.items():
        setattr(group, key, value)
    db.commit()
    db.refresh(group)
    return group


@router.delete("/{group_id}")
def delete_group(group_id: str, db: Session = Depends(get_db)) -> dict:
    group = db.get(StudentGroup, group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    db.delete(group)
    db.commit()
    return {"success": True}
