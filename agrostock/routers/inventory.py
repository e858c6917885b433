# agrostock/routers/inventory.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrostock.database import get_db
from agrostock.models import Movement
from agrostock.schemas.inventory import MovementCreate, MovementRead
from agrostock.crud.catalog import get_product, get_supplier
from agrostock.crud.inventory import get_movements
from agrostock.exceptions import NotFoundError
from agrostock.services.stock_ledger import record_movement
from agrostock.security import get_current_user

router = APIRouter()


def _to_read(m: Movement) -> MovementRead:
    # Mapeo manual para incluir el nombre del usuario
    read = MovementRead.model_validate(m)
    read.user_name = m.user.username if m.user else "Sistema"
    return read


@router.post("/movements", response_model=MovementRead)
def create_movement(
    mov_in: MovementCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """
    Registra entradas (compras, recepciones) o salidas (despachos, mermas).
    Es la única forma de cambiar el stock de un producto.
    """
    product = get_product(db, mov_in.product_code)
    if not product:
        raise NotFoundError("Producto", mov_in.product_code)

    supplier = None
    if mov_in.supplier_code:
        supplier = get_supplier(db, mov_in.supplier_code)
        if not supplier:
            raise NotFoundError("Proveedor", mov_in.supplier_code)

    movement = Movement(
        product=product,
        supplier=supplier,
        user_id=current_user.id,
        movement_type=mov_in.movement_type,
        quantity=mov_in.quantity,
        notes=mov_in.notes,
    )
    if mov_in.date:
        movement.date = mov_in.date

    record_movement(db, movement)
    return _to_read(movement)


@router.get("/movements", response_model=List[MovementRead])
def list_movements(
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return [_to_read(m) for m in get_movements(db, limit=limit)]


@router.get("/kardex/{product_code}", response_model=List[MovementRead])
def get_kardex(
    product_code: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Obtiene el historial de movimientos de un producto"""
    if not get_product(db, product_code):
        raise NotFoundError("Producto", product_code)
    return [_to_read(m) for m in get_movements(db, product_code=product_code)]
