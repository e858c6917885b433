# agrostock/routers/clients.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from agrostock.database import get_db
from agrostock.models import Client, SaleType
from agrostock.schemas.clients import ClientCreate, ClientRead, ClientUpdate
from agrostock.schemas.invoices import InvoiceRead
from agrostock.crud.clients import get_client, get_clients
from agrostock.crud.invoices import get_invoices
from agrostock.exceptions import AgroStockError, NotFoundError, ValidationError
from agrostock.services.catalog import validate_client, deactivate_client
from agrostock.security import get_current_user

router = APIRouter()

# --------------------------------------------------------------------------
# 1. LISTAR CLIENTES
# --------------------------------------------------------------------------
@router.get("/", response_model=List[ClientRead])
def list_clients(
    skip: int = 0,
    limit: int = 100,
    search: str = None,  # Buscar por nombre o código
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return get_clients(db, skip=skip, limit=limit, search=search)

# --------------------------------------------------------------------------
# 2. OBTENER DETALLE
# --------------------------------------------------------------------------
@router.get("/{code}", response_model=ClientRead)
def read_client(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    client = get_client(db, code)
    if not client:
        raise NotFoundError("Cliente", code)
    return client

# --------------------------------------------------------------------------
# 3. CREAR CLIENTE (el saldo empieza en cero)
# --------------------------------------------------------------------------
@router.post("/", response_model=ClientRead)
def create_client(
    client_in: ClientCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    if get_client(db, client_in.code):
        raise ValidationError("client_code_duplicated", code=client_in.code)

    client = Client(**client_in.model_dump(), outstanding_balance=0, is_active=True)
    validate_client(client)

    db.add(client)
    db.commit()
    db.refresh(client)
    return client

# --------------------------------------------------------------------------
# 4. ACTUALIZAR CLIENTE
# --------------------------------------------------------------------------
@router.put("/{code}", response_model=ClientRead)
def update_client(
    code: str,
    client_in: ClientUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    client = get_client(db, code)
    if not client:
        raise NotFoundError("Cliente", code)

    changes = client_in.model_dump(exclude_unset=True)
    is_active = changes.pop("is_active", None)

    try:
        # Desactivar pasa por la misma regla que el DELETE (sin deuda)
        if is_active is False:
            deactivate_client(client)
        elif is_active:
            client.is_active = True

        for field, value in changes.items():
            setattr(client, field, value)
        validate_client(client)
    except AgroStockError:
        db.rollback()
        raise

    db.commit()
    db.refresh(client)
    return client

# --------------------------------------------------------------------------
# 5. DESACTIVAR (SOFT DELETE)
# --------------------------------------------------------------------------
@router.delete("/{code}", response_model=ClientRead)
def delete_client(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    client = get_client(db, code)
    if not client:
        raise NotFoundError("Cliente", code)

    deactivate_client(client)
    db.commit()
    db.refresh(client)
    return client

# --------------------------------------------------------------------------
# 6. FACTURAS PENDIENTES DEL CLIENTE
# --------------------------------------------------------------------------
@router.get("/{code}/pending-invoices", response_model=List[InvoiceRead])
def read_pending_invoices(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if not get_client(db, code):
        raise NotFoundError("Cliente", code)
    return get_invoices(db, client_code=code, sale_type=SaleType.CREDIT, paid=False)
