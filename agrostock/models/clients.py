from sqlalchemy import Column, String, Boolean, Numeric, DateTime
from sqlalchemy.sql import func

from agrostock.database import Base
from agrostock.utils.money import to_decimal


class Client(Base):
    __tablename__ = "clients"

    # Código interno de la agropecuaria: CLI-001, CLI-002, etc.
    code = Column(String(15), primary_key=True)
    name = Column(String(80), nullable=False, index=True)  # Productor, finca o empresa
    client_type = Column(String(30), nullable=True)        # Productor, Distribuidor, Detalle, Mayorista
    is_active = Column(Boolean, default=True, nullable=False)

    phone = Column(String(30), nullable=True)
    email = Column(String(80), nullable=True)

    # Ubicación (rutas de reparto y entregas en finca)
    address = Column(String(200), nullable=True)
    municipality = Column(String(40), nullable=True)
    department = Column(String(40), nullable=True)

    # --- Campos de Crédito ---
    allows_credit = Column(Boolean, default=False, nullable=False)
    credit_limit = Column(Numeric(14, 2), default=0)
    outstanding_balance = Column(Numeric(14, 2), default=0)  # Cuánto nos debe

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_blocked_by_debt(self):
        """True si ya alcanzó su límite de crédito."""
        return bool(self.allows_credit) and to_decimal(self.outstanding_balance) >= to_decimal(self.credit_limit)

    def __repr__(self):
        return f"<Client {self.code} - {self.name}>"
