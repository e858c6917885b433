import enum
from datetime import date

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, Numeric, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agrostock.database import Base


class SaleType(str, enum.Enum):
    CASH = "CASH"      # Contado
    CREDIT = "CREDIT"  # Crédito: se carga al saldo del cliente


# --- Encabezado de Factura ---
class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    number = Column(String(20), unique=True, nullable=False, index=True)  # Número visible
    date = Column(Date, default=date.today, nullable=False)

    client_code = Column(String(15), ForeignKey("clients.code"), nullable=False)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    sale_type = Column(Enum(SaleType), nullable=False, default=SaleType.CASH)
    paid = Column(Boolean, default=False, nullable=False)

    # % IVA aplicado a toda la factura
    tax_rate = Column(Numeric(5, 2), nullable=True)

    # Totales calculados (solo los escribe el motor de facturación)
    subtotal = Column(Numeric(14, 2), default=0)
    tax = Column(Numeric(14, 2), default=0)
    total = Column(Numeric(14, 2), default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    client = relationship("Client")
    seller = relationship("User")
    lines = relationship(
        "InvoiceLine",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLine.id",
    )

    @property
    def is_credit_sale(self):
        return self.sale_type == SaleType.CREDIT

    def __repr__(self):
        return f"<Invoice {self.number} ({self.date})>"


# --- Detalle de Factura ---
class InvoiceLine(Base):
    __tablename__ = "invoice_lines"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    product_code = Column(String(15), ForeignKey("products.code"), nullable=False)

    quantity = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)  # Precio aplicado en esta venta
    amount = Column(Numeric(14, 2), nullable=True)       # cantidad * precio, redondeado

    invoice = relationship("Invoice", back_populates="lines")
    product = relationship("Product")
