# agrostock/routers/invoices.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List, Optional

from agrostock.config import DEFAULT_TAX_RATE
from agrostock.database import get_db
from agrostock.models import Invoice, SaleType
from agrostock.schemas.invoices import InvoiceCreate, InvoiceRead, InvoiceUpdate, PaymentResult
from agrostock.crud.catalog import get_product
from agrostock.crud.clients import get_client
from agrostock.crud.invoices import get_invoice, get_invoices
from agrostock.exceptions import NotFoundError, ValidationError
from agrostock.services.invoice_engine import add_line, create_invoice, update_invoice
from agrostock.services.payments import pay_invoice
from agrostock.utils.folios import get_next_invoice_number
from agrostock.utils.pdf_generator import generate_invoice_pdf
from agrostock.security import get_current_user

router = APIRouter()


def _load_client(db: Session, code: str):
    client = get_client(db, code)
    if not client:
        raise NotFoundError("Cliente", code)
    return client


def _add_lines(db: Session, invoice: Invoice, lines_in):
    for item in lines_in:
        product = get_product(db, item.product_code)
        if not product:
            raise NotFoundError("Producto", item.product_code)

        # Sin precio explícito se vende a precio de lista
        unit_price = item.unit_price if item.unit_price is not None else product.sale_price
        add_line(invoice, product, item.quantity, unit_price)


@router.get("/", response_model=List[InvoiceRead])
def list_invoices(
    skip: int = 0,
    limit: int = 100,
    client_code: Optional[str] = None,
    sale_type: Optional[SaleType] = None,
    paid: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return get_invoices(db, skip=skip, limit=limit, client_code=client_code, sale_type=sale_type, paid=paid)


@router.get("/{number}", response_model=InvoiceRead)
def read_invoice(number: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    invoice = get_invoice(db, number)
    if not invoice:
        raise NotFoundError("Factura", number)
    return invoice


@router.post("/", response_model=InvoiceRead)
def create_invoice_endpoint(
    invoice_in: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """
    Registra una factura. Si es a crédito, valida el límite del cliente y
    carga el total a su saldo. No descuenta stock: las salidas se registran
    aparte en inventario.
    """
    number = invoice_in.number or get_next_invoice_number(db)
    if get_invoice(db, number):
        raise ValidationError("invoice_number_duplicated", number=number)

    invoice = Invoice(
        number=number,
        client=_load_client(db, invoice_in.client_code),
        seller_id=current_user.id,
        sale_type=invoice_in.sale_type,
        paid=False,
        tax_rate=invoice_in.tax_rate if invoice_in.tax_rate is not None else DEFAULT_TAX_RATE,
    )
    if invoice_in.date:
        invoice.date = invoice_in.date

    _add_lines(db, invoice, invoice_in.lines)
    return create_invoice(db, invoice)


@router.put("/{number}", response_model=InvoiceRead)
def update_invoice_endpoint(
    number: str,
    invoice_in: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    invoice = get_invoice(db, number)
    if not invoice:
        raise NotFoundError("Factura", number)

    changes = invoice_in.model_dump(exclude_unset=True)

    def apply_changes(inv: Invoice):
        if changes.get("client_code"):
            inv.client = _load_client(db, changes["client_code"])
        for field in ("date", "sale_type", "tax_rate"):
            if field in changes:
                setattr(inv, field, changes[field])
        if invoice_in.lines is not None:
            # Se reemplazan todas las líneas (las anteriores se eliminan)
            inv.lines = []
            _add_lines(db, inv, invoice_in.lines)

    return update_invoice(db, invoice, apply_changes)


@router.post("/{number}/pay", response_model=PaymentResult)
def pay_invoice_endpoint(number: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    """Registra el pago de una factura de crédito y baja el saldo del cliente."""
    invoice = get_invoice(db, number)
    if not invoice:
        raise NotFoundError("Factura", number)

    pay_invoice(db, invoice)
    return PaymentResult(
        number=invoice.number,
        paid=invoice.paid,
        client_code=invoice.client_code,
        outstanding_balance=invoice.client.outstanding_balance,
    )


@router.get("/{number}/pdf")
def invoice_pdf(number: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    invoice = get_invoice(db, number)
    if not invoice:
        raise NotFoundError("Factura", number)

    return Response(
        content=generate_invoice_pdf(invoice),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=Factura_{invoice.number}.pdf"},
    )
