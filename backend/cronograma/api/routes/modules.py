from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.module import Module
from cronograma.schemas.module import ModuleCreate, ModuleOut, ModuleUpdate

router = APIRouter()


@router.get("/", response_model=list[ModuleOut])
def list_modules(db: Session = Depends(get_db)) -> list[ModuleOut]:
    return list(db.execute(select(Module).order_by(Module.name)).scalars())


@router.post("/", response_model=ModuleOut, status_code=status.HTTP_201_CREATED)
def create_module(payload: ModuleCreate, db: Session = Depends(get_db)) -> ModuleOut:
    module = Module(**payload.model_dump())
    db.add(module)
    db.commit()
    db.refresh(module)
    return module


@router.put("/{module_id}", response_model=ModuleOut)
def update_module(module_id: str, payload: ModuleUpdate, db: Session = Depends(get_db)) -> ModuleOut:
    module = db.get(Module, module_id)
    if module is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found")
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key != "description":
            continue
        setattr(module, key, value)
    db.commit()
    db.refresh(module)
    return module


@router.delete("/{module_id}")
def delete_module(module_id: str, db: Session = Depends(get_db)) -> dict:
    module = db.get(Module, module_id)
    if module is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found")
    db.delete(module)
    db.commit()
    return {"success": True}
