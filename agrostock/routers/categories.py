from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from agrostock.database import get_db
from agrostock.models import Category
from agrostock.schemas.catalog import CategoryCreate, CategoryUpdate, CategoryRead
from agrostock.crud.catalog import get_categories, get_category, get_category_by_name
from agrostock.exceptions import AgroStockError, NotFoundError, ValidationError
from agrostock.services.catalog import validate_category
from agrostock.security import get_current_user

router = APIRouter()

@router.get("/", response_model=List[CategoryRead])
def list_categories(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return get_categories(db, active_only=not include_inactive)

@router.post("/", response_model=CategoryRead)
def create_category(cat_in: CategoryCreate, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    category = Category(name=cat_in.name, description=cat_in.description, is_active=True)
    validate_category(category)

    if get_category_by_name(db, category.name):
        raise ValidationError("category_name_duplicated", name=category.name)

    db.add(category)
    db.commit()
    db.refresh(category)
    return category

@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    cat_in: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    category = get_category(db, category_id)
    if not category:
        raise NotFoundError("Categoría", category_id)

    try:
        for field, value in cat_in.model_dump(exclude_unset=True).items():
            setattr(category, field, value)
        validate_category(category)

        existing = get_category_by_name(db, category.name)
        if existing and existing.id != category.id:
            raise ValidationError("category_name_duplicated", name=category.name)
    except AgroStockError:
        db.rollback()
        raise

    db.commit()
    db.refresh(category)
    return category
