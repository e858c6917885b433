"""
Motor de facturación.

Reglas que mantienen consistentes las líneas, los totales de la factura y
el saldo del cliente. Las funciones de cálculo y validación trabajan sobre
objetos en memoria; `create_invoice` y `update_invoice` son las fronteras
transaccionales que las invocan en orden y hacen commit/rollback.

Política de redondeo: mitad hacia arriba, 2 decimales, en cada paso de la
agregación (no solo al final).
"""

import logging

from sqlalchemy.orm import Session

from agrostock.exceptions import AgroStockError, CreditLimitExceededError, ValidationError
from agrostock.models import Client, Invoice, InvoiceLine, Product, SaleType
from agrostock.utils.money import ZERO, rate_fraction, round2, to_decimal

logger = logging.getLogger(__name__)


def validate_line(line: InvoiceLine):
    """Valida la línea y calcula su importe. Devuelve el importe."""
    if line.product is None:
        raise ValidationError("line_product_required")

    if line.quantity is None or to_decimal(line.quantity) <= 0:
        raise ValidationError("line_quantity_positive")

    if line.unit_price is None or to_decimal(line.unit_price) <= 0:
        raise ValidationError("line_unit_price_positive")

    # Antidumping: nunca por debajo del precio de compra
    purchase_price = line.product.purchase_price
    if purchase_price is not None and to_decimal(line.unit_price) < to_decimal(purchase_price):
        raise ValidationError("line_below_purchase_price", product=line.product.name)

    line.amount = round2(to_decimal(line.quantity) * to_decimal(line.unit_price))
    return line.amount


def add_line(invoice: Invoice, product: Product, quantity, unit_price) -> InvoiceLine:
    """Agrega una línea a la factura en borrador y recalcula. No persiste."""
    line = InvoiceLine(product=product, quantity=quantity, unit_price=unit_price)
    validate_line(line)
    invoice.lines.append(line)
    recompute_totals(invoice)
    return line


def recompute_totals(invoice: Invoice) -> None:
    """Recalcula subtotal, impuesto y total a partir de las líneas."""
    subtotal = ZERO
    for line in invoice.lines or []:
        # Un importe ausente cuenta como cero
        subtotal += to_decimal(getattr(line, "amount", None))

    invoice.subtotal = round2(subtotal)
    invoice.tax = round2(invoice.subtotal * rate_fraction(invoice.tax_rate))
    invoice.total = round2(invoice.subtotal + invoice.tax)


def validate_and_recompute(invoice: Invoice) -> None:
    """Validaciones y recálculo antes de cada alta o modificación."""
    if not invoice.lines:
        raise ValidationError("invoice_without_lines")

    client = invoice.client
    if client is None:
        raise ValidationError("invoice_without_client")

    for line in invoice.lines:
        validate_line(line)

    recompute_totals(invoice)

    if invoice.total <= 0:
        raise ValidationError("invoice_total_positive")

    # Reglas de crédito
    if invoice.sale_type == SaleType.CREDIT:
        if not client.allows_credit:
            raise ValidationError("client_without_credit", client=client.name)

        limit = to_decimal(client.credit_limit)
        balance = to_decimal(client.outstanding_balance)

        if balance + invoice.total > limit:
            raise CreditLimitExceededError(limit=limit, balance=balance)


def post_commit_balance_sync(invoice: Invoice) -> None:
    """
    Carga el total al saldo del cliente si la factura queda a crédito y pendiente.

    Debe correr exactamente una vez por alta/modificación: dos llamadas
    cuentan el total dos veces.
    """
    if invoice.sale_type != SaleType.CREDIT:
        return
    if invoice.paid:
        return
    # Si el total aún no está calculado, no hacemos nada
    if invoice.total is None:
        return

    client = invoice.client
    if client is None:
        return
    client.outstanding_balance = round2(to_decimal(client.outstanding_balance) + to_decimal(invoice.total))


def release_balance(invoice: Invoice) -> None:
    """Descuenta del saldo del cliente lo que esta factura ya le había cargado."""
    if invoice.sale_type != SaleType.CREDIT or invoice.paid or invoice.client is None:
        return

    client = invoice.client
    new_balance = to_decimal(client.outstanding_balance) - to_decimal(invoice.total)
    client.outstanding_balance = round2(max(ZERO, new_balance))


def _lock_client(db: Session, invoice: Invoice) -> None:
    # SELECT ... FOR UPDATE sobre el cliente mientras se valida el crédito
    if invoice.client is None:
        return
    invoice.client = (
        db.query(Client)
        .filter(Client.code == invoice.client.code)
        .populate_existing()
        .with_for_update()
        .first()
    )


def _commit(db: Session, invoice: Invoice) -> Invoice:
    validate_and_recompute(invoice)
    db.add(invoice)
    db.flush()
    post_commit_balance_sync(invoice)
    db.commit()
    db.refresh(invoice)
    return invoice


def create_invoice(db: Session, invoice: Invoice) -> Invoice:
    """Graba una factura nueva y, si es a crédito, carga el saldo del cliente."""
    number = invoice.number
    try:
        _lock_client(db, invoice)
        _commit(db, invoice)
    except AgroStockError as exc:
        db.rollback()
        logger.warning("Factura %s rechazada: %s", number, exc.key)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Factura %s grabada: cliente %s, %s, total %s",
        invoice.number,
        invoice.client_code,
        invoice.sale_type.value,
        invoice.total,
    )
    return invoice


def update_invoice(db: Session, invoice: Invoice, apply_changes) -> Invoice:
    """
    Modifica una factura ya grabada.

    `apply_changes(invoice)` aplica los cambios del usuario. Antes se libera
    lo que la factura cargó al saldo del cliente, así el nuevo total se
    cuenta una sola vez. Si algo falla, el rollback deja todo como estaba.
    """
    if invoice.paid:
        raise ValidationError("invoice_paid_locked", number=invoice.number)

    try:
        _lock_client(db, invoice)
        locked_code = invoice.client.code if invoice.client is not None else None
        release_balance(invoice)
        apply_changes(invoice)
        # Releer el mismo cliente pisaría el saldo ya liberado
        if invoice.client is not None and invoice.client.code != locked_code:
            _lock_client(db, invoice)
        _commit(db, invoice)
    except AgroStockError as exc:
        db.rollback()
        logger.warning("Factura %s rechazada: %s", invoice.number, exc.key)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info("Factura %s actualizada: total %s", invoice.number, invoice.total)
    return invoice
