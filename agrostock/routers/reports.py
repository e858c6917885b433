# agrostock/routers/reports.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from datetime import date
from decimal import Decimal
from typing import List

from agrostock.database import get_db
from agrostock.crud.catalog import get_products, get_low_stock_products
from agrostock.crud.clients import get_debtors
from agrostock.crud.inventory import get_movement_history
from agrostock.schemas.catalog import ProductRead
from agrostock.schemas.invoices import ReceivablesReport
from agrostock.utils.pdf_generator import generate_product_report_pdf, generate_movement_history_pdf
from agrostock.security import get_current_user

router = APIRouter()


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/products.pdf")
def product_report(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    """Productos activos ordenados por nombre."""
    products = get_products(db, limit=None)
    return _pdf_response(generate_product_report_pdf(products), "ProductoDetalle.pdf")


@router.get("/movements.pdf")
def movement_history_report(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    """Todos los movimientos ordenados por fecha y nombre de producto."""
    movements = get_movement_history(db)
    return _pdf_response(generate_movement_history_pdf(movements), "HistorialMovimientos.pdf")


@router.get("/low-stock", response_model=List[ProductRead])
def low_stock_report(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return get_low_stock_products(db)


@router.get("/receivables", response_model=ReceivablesReport)
def receivables_report(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    """Cuentas por cobrar: clientes con saldo pendiente."""
    rows = []
    total_receivable = Decimal("0.00")

    for client in get_debtors(db):
        rows.append({
            "client_code": client.code,
            "client_name": client.name,
            "credit_limit": client.credit_limit,
            "outstanding_balance": client.outstanding_balance,
            "is_blocked_by_debt": client.is_blocked_by_debt,
        })
        total_receivable += client.outstanding_balance

    return {
        "report_date": date.today(),
        "total_receivable": total_receivable,
        "clients": rows,
    }
