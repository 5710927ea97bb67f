from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from sehaty import crud, models, schemas
from sehaty.api import deps

router = APIRouter()


@router.get("/categories", response_model=List[schemas.Category])
def read_categories(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    return crud.category.get_multi(db, skip=skip, limit=limit)


@router.post("/categories", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
def create_category(
    *,
    db: Session = Depends(deps.get_db),
    category_in: schemas.CategoryCreate,
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    return crud.category.create(db, obj_in=category_in)


@router.get("/active-ingredients", response_model=List[schemas.ActiveIngredient])
def read_active_ingredients(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    return crud.active_ingredient.get_multi(db, skip=skip, limit=limit)


@router.post("/active-ingredients", response_model=schemas.ActiveIngredient, status_code=status.HTTP_201_CREATED)
def create_active_ingredient(
    *,
    db: Session = Depends(deps.get_db),
    ingredient_in: schemas.ActiveIngredientCreate,
    current_user: models.User = Depends(deps.get_current_catalog_manager),
) -> Any:
    if crud.active_ingredient.get_by_name(db, name=ingredient_in.name):
        raise HTTPException(status_code=400, detail="Active ingredient already exists")
    return crud.active_ingredient.create(db, obj_in=ingredient_in)
