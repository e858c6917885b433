from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from agrostock.database import get_db
from agrostock.models import Supplier
from agrostock.schemas.catalog import SupplierCreate, SupplierUpdate, SupplierRead
from agrostock.crud.catalog import get_supplier, get_suppliers
from agrostock.exceptions import AgroStockError, NotFoundError, ValidationError
from agrostock.services.catalog import validate_supplier
from agrostock.security import get_current_user

router = APIRouter()

@router.get("/", response_model=List[SupplierRead])
def list_suppliers(
    search: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return get_suppliers(db, search=search)

@router.get("/{code}", response_model=SupplierRead)
def read_supplier(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    supplier = get_supplier(db, code)
    if not supplier:
        raise NotFoundError("Proveedor", code)
    return supplier

@router.post("/", response_model=SupplierRead)
def create_supplier(sup_in: SupplierCreate, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if get_supplier(db, sup_in.code):
        raise ValidationError("supplier_code_duplicated", code=sup_in.code)

    supplier = Supplier(**sup_in.model_dump(), is_active=True)
    validate_supplier(supplier)

    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier

@router.put("/{code}", response_model=SupplierRead)
def update_supplier(
    code: str,
    sup_in: SupplierUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    supplier = get_supplier(db, code)
    if not supplier:
        raise NotFoundError("Proveedor", code)

    try:
        for field, value in sup_in.model_dump(exclude_unset=True).items():
            setattr(supplier, field, value)
        validate_supplier(supplier)
    except AgroStockError:
        db.rollback()
        raise

    db.commit()
    db.refresh(supplier)
    return supplier
