from sqlalchemy.orm import Session

from agrostock.config import INVOICE_PREFIX
from agrostock.models import Invoice


def get_next_invoice_number(db: Session, prefix: str = INVOICE_PREFIX) -> str:
    """
    Obtiene el siguiente número de factura para la serie indicada.
    Toma el número más alto de la serie y suma 1: FAC-000041 -> FAC-000042.
    """
    pattern = f"{prefix}-%"
    numbers = db.query(Invoice.number).filter(Invoice.number.like(pattern)).all()

    max_folio = 0
    for (number,) in numbers:
        suffix = number[len(prefix) + 1:]
        if suffix.isdigit():
            max_folio = max(max_folio, int(suffix))

    return f"{prefix}-{max_folio + 1:06d}"
