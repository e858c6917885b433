import enum
from datetime import date

from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Numeric, Date, DateTime, event
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agrostock.database import Base
from agrostock.exceptions import ImmutableRecordError


class MovementType(str, enum.Enum):
    IN = "IN"    # Entrada (compra, recepción de proveedor)
    OUT = "OUT"  # Salida (despacho, merma)


class Movement(Base):
    __tablename__ = "movements"

    id = Column(Integer, primary_key=True, index=True)
    product_code = Column(String(15), ForeignKey("products.code"), nullable=False)
    # Proveedor: solo tiene sentido para entradas, pero es opcional
    supplier_code = Column(String(15), ForeignKey("suppliers.code"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    movement_type = Column(Enum(MovementType), nullable=False)
    date = Column(Date, default=date.today, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=False)
    stock_after = Column(Numeric(12, 2), nullable=True)
    notes = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product")
    supplier = relationship("Supplier")
    user = relationship("User")

    def __repr__(self):
        return f"<Movement {self.date} {self.movement_type} {self.product_code} ({self.quantity})>"


# Un movimiento aplicado no se toca: para corregir se registra otro en sentido contrario
@event.listens_for(Movement, "before_update")
def _reject_movement_update(mapper, connection, target):
    raise ImmutableRecordError("movement_immutable")


@event.listens_for(Movement, "before_delete")
def _reject_movement_delete(mapper, connection, target):
    raise ImmutableRecordError("movement_immutable")
