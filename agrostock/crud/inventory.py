from sqlalchemy.orm import Session

from agrostock.models import Movement, Product


def get_movements(db: Session, product_code: str = None, limit: int = 100):
    query = db.query(Movement)
    if product_code:
        query = query.filter(Movement.product_code == product_code)
    return query.order_by(Movement.date.desc(), Movement.id.desc()).limit(limit).all()

def get_movement_history(db: Session):
    """Todos los movimientos ordenados por fecha y nombre de producto."""
    return (
        db.query(Movement)
        .join(Product)
        .order_by(Movement.date, Product.name, Movement.id)
        .all()
    )
