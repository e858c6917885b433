from typing import Optional
from pydantic import BaseModel, EmailStr
from decimal import Decimal

# --- Categorías ---
class CategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

class CategoryRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    class Config:
        from_attributes = True

# --- Proveedores ---
class SupplierBase(BaseModel):
    legal_name: str
    trade_name: Optional[str] = None
    supplier_type: str
    phone: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    address: Optional[str] = None
    municipality: Optional[str] = None
    department: Optional[str] = None
    country: Optional[str] = "Nicaragua"

    # Condiciones de crédito
    handles_credit: bool = False
    credit_days: int = 0
    credit_limit: Decimal = Decimal("0.00")
    outstanding_balance: Decimal = Decimal("0.00")

class SupplierCreate(SupplierBase):
    code: str

class SupplierUpdate(SupplierBase):
    # Permitimos editar todo de forma opcional
    legal_name: Optional[str] = None
    supplier_type: Optional[str] = None
    handles_credit: Optional[bool] = None
    credit_days: Optional[int] = None
    credit_limit: Optional[Decimal] = None
    outstanding_balance: Optional[Decimal] = None
    is_active: Optional[bool] = None

class SupplierRead(SupplierBase):
    code: str
    is_active: bool
    email: Optional[str] = None
    class Config:
        from_attributes = True

# --- Productos ---
class ProductCreate(BaseModel):
    code: str
    name: str
    product_type: Optional[str] = None
    description: Optional[str] = None
    unit_of_measure: str = "unidad"

    category_id: int
    supplier_code: str

    minimum_stock: Decimal = Decimal(0)
    purchase_price: Decimal
    sale_price: Decimal

class ProductUpdate(BaseModel):
    # El stock no se edita aquí: solo cambia con movimientos
    name: Optional[str] = None
    product_type: Optional[str] = None
    description: Optional[str] = None
    unit_of_measure: Optional[str] = None
    category_id: Optional[int] = None
    supplier_code: Optional[str] = None
    minimum_stock: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    is_active: Optional[bool] = None

class ProductRead(BaseModel):
    code: str
    name: str
    product_type: Optional[str] = None
    description: Optional[str] = None
    unit_of_measure: str
    is_active: bool
    category: Optional[CategoryRead] = None
    supplier_code: str

    current_stock: Decimal
    minimum_stock: Decimal
    purchase_price: Decimal
    sale_price: Decimal
    is_below_minimum: bool = False

    class Config:
        from_attributes = True
