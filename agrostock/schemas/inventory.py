from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
import datetime as dt

from agrostock.models import MovementType

# Input para registrar una entrada o salida
class MovementCreate(BaseModel):
    product_code: str
    movement_type: str    # IN / OUT
    quantity: Decimal
    date: Optional[dt.date] = None
    supplier_code: Optional[str] = None
    notes: Optional[str] = None

# Output para leer el Kardex
class MovementRead(BaseModel):
    id: int
    product_code: str
    movement_type: MovementType
    date: dt.date
    quantity: Decimal
    stock_after: Optional[Decimal] = None
    supplier_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    user_name: str = "Sistema"

    class Config:
        from_attributes = True
