"""
Kardex de inventario.

`apply_movement` es la única regla que cambia `Product.current_stock`;
`record_movement` la envuelve en la transacción de la sesión.
"""

import logging

from sqlalchemy.orm import Session

from agrostock.exceptions import (
    AgroStockError,
    InsufficientStockError,
    UnsupportedOperationError,
    ValidationError,
)
from agrostock.models import Movement, MovementType, Product
from agrostock.utils.money import round2, to_decimal

logger = logging.getLogger(__name__)


def apply_movement(product: Product, movement_type, quantity) -> None:
    """
    Aplica una entrada o salida sobre el stock del producto (en memoria).

    Raises:
        ValidationError: sin producto o cantidad <= 0.
        InsufficientStockError: salida mayor que el stock disponible.
        UnsupportedOperationError: tipo distinto de IN / OUT.
    """
    if product is None:
        raise ValidationError("movement_product_required")

    if quantity is None or to_decimal(quantity) <= 0:
        raise ValidationError("movement_quantity_positive")

    try:
        movement_type = MovementType(movement_type)
    except ValueError:
        raise UnsupportedOperationError("unsupported_movement_type", movement_type=movement_type)

    quantity = to_decimal(quantity)
    current_stock = to_decimal(product.current_stock)

    if movement_type == MovementType.IN:
        product.current_stock = round2(current_stock + quantity)
    elif movement_type == MovementType.OUT:
        # Valida que haya stock suficiente
        if current_stock < quantity:
            raise InsufficientStockError(product=product.name, available=round2(current_stock))
        product.current_stock = round2(current_stock - quantity)
    else:
        raise UnsupportedOperationError("unsupported_movement_type", movement_type=movement_type)


def record_movement(db: Session, movement: Movement) -> Movement:
    """Aplica el movimiento y lo guarda; si algo falla, nada queda grabado."""
    try:
        product = movement.product
        if product is not None:
            # Bloqueo de la fila del producto mientras dura la operación
            product = (
                db.query(Product)
                .filter(Product.code == product.code)
                .populate_existing()
                .with_for_update()
                .first()
            )

        apply_movement(product, movement.movement_type, movement.quantity)
        movement.product = product
        movement.stock_after = product.current_stock

        db.add(movement)
        db.commit()
    except AgroStockError as exc:
        db.rollback()
        logger.warning("Movimiento rechazado: %s", exc.key)
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(movement)
    logger.info(
        "Movimiento %s aplicado: %s %s -> stock %s",
        movement.movement_type.value,
        product.code,
        movement.quantity,
        product.current_stock,
    )
    if product.is_below_minimum:
        logger.warning(
            "Producto %s bajo el mínimo: stock %s, mínimo %s",
            product.code,
            product.current_stock,
            product.minimum_stock,
        )
    return movement
