from sqlalchemy.orm import Session, joinedload

from agrostock.models import Invoice, InvoiceLine, SaleType


def get_invoice(db: Session, number: str):
    return (
        db.query(Invoice)
        .options(joinedload(Invoice.lines).joinedload(InvoiceLine.product))
        .filter(Invoice.number == number)
        .first()
    )

def get_invoices(db: Session, skip: int = 0, limit: int = 100, client_code: str = None,
                 sale_type: SaleType = None, paid: bool = None):
    query = db.query(Invoice)
    if client_code:
        query = query.filter(Invoice.client_code == client_code)
    if sale_type is not None:
        query = query.filter(Invoice.sale_type == sale_type)
    if paid is not None:
        query = query.filter(Invoice.paid == paid)
    return query.order_by(Invoice.date.desc(), Invoice.id.desc()).offset(skip).limit(limit).all()
