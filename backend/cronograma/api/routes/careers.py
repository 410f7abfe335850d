from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.career import Career
from cronograma.models.group import StudentGroup
from cronograma.schemas.career import CareerCreate, CareerOut, CareerUpdate

router = APIRouter()


@router.get("/", response_model=list[CareerOut])
def list_careers(db: Session = Depends(get_db)) -> list[CareerOut]:
    return list(db.execute(select(Career).order_by(Career.name)).scalars())


@router.post("/", response_model=CareerOut, status_code=status.HTTP_201_CREATED)
def create_career(payload: CareerCreate, db: Session = Depends(get_db)) -> CareerOut:
    existing = db.execute(select(Career).where(Career.name == payload.name)).scalar_one_or_none()
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Career name already exists")
    career = Career(**payload.model_dump())
    db.add(career)
    db.commit()
    db.refresh(career)
    return career


@router.put("/{career_id}", response_model=CareerOut)
def update_career(career_id: str, payload: CareerUpdate, db: Session = Depends(get_db)) -> CareerOut:
    career = db.get(Career, career_id)
    if career is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(career, key, value)
    db.commit()
    db.refresh(career)
    return career


@router.delete("/{career_id}")
def delete_career(career_id: str, db: Session = Depends(get_db)) -> dict:
    career = db.get(Career, career_id)
    if career is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career not found")
    in_use = db.execute(select(StudentGroup.id).where(StudentGroup.career_id == career_id).limit(1)).first()
    if in_use:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Career still has groups")
    db.delete(career)
    db.commit()
    return {"success": True}
