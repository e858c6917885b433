from pydantic import BaseModel, EmailStr
from typing import Optional
from decimal import Decimal
from datetime import datetime

# --- CLASES BASE ---

class ClientBase(BaseModel):
    name: str
    client_type: Optional[str] = None  # Productor, Distribuidor, Detalle, Mayorista
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    municipality: Optional[str] = None
    department: Optional[str] = None

    # Configuración de Crédito
    allows_credit: bool = False
    credit_limit: Decimal = Decimal("0.00")

# --- CREACIÓN ---
class ClientCreate(ClientBase):
    code: str

# --- ACTUALIZACIÓN ---
class ClientUpdate(ClientBase):
    # El saldo no se edita: lo mueven las facturas y los pagos
    name: Optional[str] = None
    allows_credit: Optional[bool] = None
    credit_limit: Optional[Decimal] = None
    is_active: Optional[bool] = None

# --- LECTURA (RESPONSE) ---
class ClientRead(ClientBase):
    code: str
    is_active: bool
    email: Optional[str] = None
    outstanding_balance: Decimal = Decimal("0.00")
    is_blocked_by_debt: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
