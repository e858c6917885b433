from sqlalchemy import or_, desc
from sqlalchemy.orm import Session

from agrostock.models import Client


def get_client(db: Session, code: str):
    return db.query(Client).filter(Client.code == code).first()

def get_clients(db: Session, skip: int = 0, limit: int = 100, search: str = None, active_only: bool = True):
    query = db.query(Client)
    if active_only:
        query = query.filter(Client.is_active == True)
    if search:
        # Búsqueda insensible a mayúsculas
        s = f"%{search}%"
        query = query.filter(or_(Client.name.ilike(s), Client.code.ilike(s)))
    return query.order_by(Client.name).offset(skip).limit(limit).all()

def get_debtors(db: Session):
    """Clientes que nos deben algo, del mayor saldo al menor."""
    return (
        db.query(Client)
        .filter(Client.outstanding_balance > 0)
        .order_by(desc(Client.outstanding_balance))
        .all()
    )
