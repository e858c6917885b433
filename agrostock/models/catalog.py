# agrostock/models/catalog.py
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from agrostock.database import Base
from agrostock.utils.money import to_decimal


# --- CATEGORÍAS (fertilizantes, agroquímicos, semillas, etc.) ---
class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False, unique=True, index=True)
    description = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    products = relationship("Product", back_populates="category")

    def __repr__(self):
        return f"<Category {self.name}>"


# --- PROVEEDORES ---
class Supplier(Base):
    __tablename__ = "suppliers"

    # Identificador interno: PROV-001, PROV-002, etc.
    code = Column(String(15), primary_key=True)
    legal_name = Column(String(120), nullable=False)
    trade_name = Column(String(120), nullable=True)
    supplier_type = Column(String(40), nullable=False)  # Agroquímicos, semillas, veterinaria...
    is_active = Column(Boolean, default=True, nullable=False)

    # Contacto
    phone = Column(String(30), nullable=True)
    mobile = Column(String(30), nullable=True)
    email = Column(String(80), nullable=True)
    website = Column(String(100), nullable=True)

    # Ubicación
    address = Column(String(200), nullable=True)
    municipality = Column(String(40), nullable=True)
    department = Column(String(40), nullable=True)
    country = Column(String(40), default="Nicaragua")

    # --- Condiciones de crédito que el proveedor nos da ---
    handles_credit = Column(Boolean, default=False, nullable=False)
    credit_days = Column(Integer, default=0)
    credit_limit = Column(Numeric(14, 2), default=0)
    outstanding_balance = Column(Numeric(14, 2), default=0)  # Lo que le debemos

    products = relationship("Product", back_populates="supplier")

    @property
    def display_name(self):
        return self.trade_name if self.trade_name and self.trade_name.strip() else self.legal_name

    def __repr__(self):
        return f"<Supplier {self.code} - {self.display_name}>"


# --- PRODUCTOS ---
class Product(Base):
    __tablename__ = "products"

    code = Column(String(15), primary_key=True)
    name = Column(String(80), nullable=False, index=True)
    product_type = Column(String(30), nullable=True)
    description = Column(String(200), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)  # Nunca se borran, solo se desactivan

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    supplier_code = Column(String(15), ForeignKey("suppliers.code"), nullable=False)

    # Inventario (solo lo modifican los movimientos)
    unit_of_measure = Column(String(20), nullable=False, default="unidad")  # saco, litro, kg...
    current_stock = Column(Numeric(12, 2), default=0, nullable=False)
    minimum_stock = Column(Numeric(12, 2), default=0, nullable=False)

    # Precios
    purchase_price = Column(Numeric(12, 2), default=0, nullable=False)
    sale_price = Column(Numeric(12, 2), default=0, nullable=False)

    category = relationship("Category", back_populates="products")
    supplier = relationship("Supplier", back_populates="products")

    @property
    def is_below_minimum(self):
        return to_decimal(self.current_stock) < to_decimal(self.minimum_stock)

    def __repr__(self):
        return f"<Product {self.code} - {self.name}>"
