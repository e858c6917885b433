from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
import datetime as dt

from agrostock.models import SaleType

# --- Models for Creation ---

class InvoiceLineCreate(BaseModel):
    product_code: str
    quantity: Decimal
    unit_price: Optional[Decimal] = None  # Si no viene, se usa el precio de venta del producto

class InvoiceCreate(BaseModel):
    number: Optional[str] = None  # Si no viene, se genera FAC-000001...
    date: Optional[dt.date] = None
    client_code: str
    sale_type: SaleType = SaleType.CASH
    tax_rate: Optional[Decimal] = None
    lines: List[InvoiceLineCreate]

class InvoiceUpdate(BaseModel):
    date: Optional[dt.date] = None
    client_code: Optional[str] = None
    sale_type: Optional[SaleType] = None
    tax_rate: Optional[Decimal] = None
    # Si viene, reemplaza todas las líneas
    lines: Optional[List[InvoiceLineCreate]] = None

# --- Models for Reading ---

class InvoiceLineRead(BaseModel):
    id: int
    product_code: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal

    class Config:
        from_attributes = True

class InvoiceRead(BaseModel):
    id: int
    number: str
    date: dt.date
    client_code: str
    sale_type: SaleType
    paid: bool
    tax_rate: Optional[Decimal] = None
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    created_at: Optional[dt.datetime] = None
    lines: List[InvoiceLineRead] = []

    class Config:
        from_attributes = True

class PaymentResult(BaseModel):
    number: str
    paid: bool
    client_code: str
    outstanding_balance: Decimal

# --- Reportes ---

class ReceivableRow(BaseModel):
    client_code: str
    client_name: str
    credit_limit: Decimal
    outstanding_balance: Decimal
    is_blocked_by_debt: bool

class ReceivablesReport(BaseModel):
    report_date: dt.date
    total_receivable: Decimal
    clients: List[ReceivableRow]
