from sqlalchemy import or_
from sqlalchemy.orm import Session

from agrostock.models import Category, Product, Supplier


# --- Categorías ---
def get_category(db: Session, category_id: int):
    return db.query(Category).filter(Category.id == category_id).first()

def get_category_by_name(db: Session, name: str):
    return db.query(Category).filter(Category.name == name.strip()).first()

def get_categories(db: Session, active_only: bool = True):
    query = db.query(Category)
    if active_only:
        query = query.filter(Category.is_active == True)
    return query.order_by(Category.name).all()


# --- Proveedores ---
def get_supplier(db: Session, code: str):
    return db.query(Supplier).filter(Supplier.code == code).first()

def get_suppliers(db: Session, search: str = None, active_only: bool = True):
    query = db.query(Supplier)
    if active_only:
        query = query.filter(Supplier.is_active == True)
    if search:
        s = f"%{search}%"
        query = query.filter(or_(Supplier.legal_name.ilike(s), Supplier.trade_name.ilike(s), Supplier.code.ilike(s)))
    return query.order_by(Supplier.legal_name).all()


# --- Productos ---
def get_product(db: Session, code: str):
    return db.query(Product).filter(Product.code == code).first()

def get_products(db: Session, skip: int = 0, limit: int = 100, search: str = None,
                 category_id: int = None, active_only: bool = True):
    query = db.query(Product)
    if active_only:
        query = query.filter(Product.is_active == True)
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if search:
        s = f"%{search}%"
        query = query.filter(or_(Product.name.ilike(s), Product.code.ilike(s)))
    return query.order_by(Product.name).offset(skip).limit(limit).all()

def get_low_stock_products(db: Session):
    """Productos activos con stock por debajo del mínimo."""
    return (
        db.query(Product)
        .filter(Product.is_active == True, Product.current_stock < Product.minimum_stock)
        .order_by(Product.name)
        .all()
    )
