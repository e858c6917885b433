"""Reglas de los datos maestros: categorías, proveedores, clientes y productos."""

import logging

from agrostock.exceptions import ValidationError
from agrostock.models import Category, Client, Product, Supplier
from agrostock.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_category(category: Category) -> None:
    if category.name is not None:
        category.name = category.name.strip()

    # Nombre obligatorio y con longitud razonable
    if not category.name:
        raise ValidationError("category_name_required")
    if len(category.name) < 3:
        raise ValidationError("category_name_too_short")
    if len(category.name) > 60:
        raise ValidationError("category_name_too_long")

    # Descripción opcional pero, si se pone, que no sea solo espacios
    if category.description is not None:
        category.description = category.description.strip() or None


def validate_supplier(supplier: Supplier) -> None:
    if _blank(supplier.phone) and _blank(supplier.mobile) and _blank(supplier.email):
        raise ValidationError("supplier_contact_required")

    # Si no maneja crédito, limpiar datos de crédito
    if not supplier.handles_credit:
        supplier.credit_days = 0
        supplier.credit_limit = ZERO
        if supplier.outstanding_balance is None:
            supplier.outstanding_balance = ZERO
        return

    if supplier.credit_days is None or supplier.credit_days <= 0:
        raise ValidationError("supplier_credit_days_positive")

    if to_decimal(supplier.credit_limit) <= 0:
        raise ValidationError("supplier_credit_limit_positive")

    if supplier.outstanding_balance is None:
        supplier.outstanding_balance = ZERO

    # No podemos deberle al proveedor más de lo que nos autoriza
    if to_decimal(supplier.outstanding_balance) > to_decimal(supplier.credit_limit):
        raise ValidationError("supplier_balance_over_limit")


def validate_client(client: Client) -> None:
    if _blank(client.phone) and _blank(client.email):
        raise ValidationError("client_contact_required")

    # Sin crédito: límite y saldo en cero
    if not client.allows_credit:
        client.credit_limit = ZERO
        client.outstanding_balance = ZERO
        return

    if to_decimal(client.credit_limit) <= 0:
        raise ValidationError("client_credit_limit_positive")

    if client.outstanding_balance is None:
        client.outstanding_balance = ZERO

    if to_decimal(client.outstanding_balance) > to_decimal(client.credit_limit):
        raise ValidationError("client_balance_over_limit")


def validate_product_prices(product: Product) -> None:
    if product.purchase_price is None or product.sale_price is None:
        return
    if to_decimal(product.sale_price) < to_decimal(product.purchase_price):
        raise ValidationError("product_sale_below_purchase", code=product.code)


def deactivate_client(client: Client) -> None:
    """Los clientes no se borran; tampoco se desactivan mientras deban."""
    balance = to_decimal(client.outstanding_balance)
    if balance > 0:
        raise ValidationError("client_has_debt", balance=balance)
    client.is_active = False
    logger.info("Cliente %s desactivado", client.code)


def deactivate_product(product: Product) -> None:
    product.is_active = False
    logger.info("Producto %s desactivado", product.code)
