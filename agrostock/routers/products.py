# agrostock/routers/products.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import List
import pandas as pd
import io

from agrostock.database import get_db
from agrostock.models import Product
from agrostock.schemas.catalog import ProductCreate, ProductRead, ProductUpdate
from agrostock.crud.catalog import get_product, get_products, get_category, get_supplier
from agrostock.exceptions import AgroStockError, NotFoundError, ValidationError
from agrostock.services.catalog import validate_product_prices, deactivate_product
from agrostock.security import get_current_user

router = APIRouter()


def _check_references(db: Session, category_id, supplier_code):
    if category_id is not None and not get_category(db, category_id):
        raise NotFoundError("Categoría", category_id)
    if supplier_code is not None and not get_supplier(db, supplier_code):
        raise NotFoundError("Proveedor", supplier_code)


# -----------------------------
# 1. Listar productos
# -----------------------------
@router.get("/", response_model=List[ProductRead])
def read_products(
    skip: int = 0,
    limit: int = 100,
    search: str = "",
    category_id: int = None,
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return get_products(
        db, skip=skip, limit=limit, search=search,
        category_id=category_id, active_only=not include_inactive,
    )


# -----------------------------
# 2. Exportar Excel
# -----------------------------
@router.get("/export/excel")
def export_products_excel(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    products = get_products(db, limit=None)

    data = [
        {
            "Código": p.code,
            "Nombre": p.name,
            "Categoría": p.category.name if p.category else "",
            "Proveedor": p.supplier.display_name if p.supplier else "",
            "Unidad": p.unit_of_measure,
            "Stock": float(p.current_stock or 0),
            "Stock Mínimo": float(p.minimum_stock or 0),
            "Precio Compra": float(p.purchase_price or 0),
            "Precio Venta": float(p.sale_price or 0),
        }
        for p in products
    ]

    df = pd.DataFrame(data, columns=[
        "Código", "Nombre", "Categoría", "Proveedor", "Unidad",
        "Stock", "Stock Mínimo", "Precio Compra", "Precio Venta",
    ])

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Productos")

    return Response(
        content=output.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=productos.xlsx"},
    )


# -----------------------------
# 3. Detalle
# -----------------------------
@router.get("/{code}", response_model=ProductRead)
def read_product(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    product = get_product(db, code)
    if not product:
        raise NotFoundError("Producto", code)
    return product


# -----------------------------
# 4. Crear producto (stock inicial en 0: se carga con una entrada)
# -----------------------------
@router.post("/", response_model=ProductRead)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if get_product(db, product_in.code):
        raise ValidationError("product_code_duplicated", code=product_in.code)
    _check_references(db, product_in.category_id, product_in.supplier_code)

    product = Product(**product_in.model_dump(), current_stock=0, is_active=True)
    validate_product_prices(product)

    db.add(product)
    db.commit()
    db.refresh(product)
    return product


# -----------------------------
# 5. Editar producto
# -----------------------------
@router.put("/{code}", response_model=ProductRead)
def update_product(
    code: str,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = get_product(db, code)
    if not product:
        raise NotFoundError("Producto", code)

    update_data = product_in.model_dump(exclude_unset=True)
    _check_references(db, update_data.get("category_id"), update_data.get("supplier_code"))

    try:
        for field, value in update_data.items():
            setattr(product, field, value)
        validate_product_prices(product)
    except AgroStockError:
        db.rollback()
        raise

    db.commit()
    db.refresh(product)
    return product


# -----------------------------
# 6. Desactivar (nunca se borran)
# -----------------------------
@router.delete("/{code}", response_model=ProductRead)
def delete_product(code: str, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    product = get_product(db, code)
    if not product:
        raise NotFoundError("Producto", code)

    deactivate_product(product)
    db.commit()
    db.refresh(product)
    return product
