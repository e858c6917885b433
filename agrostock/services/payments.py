"""
Registro de pago de facturas de crédito.

Una factura tiene dos estados de pago: pendiente y pagada. El único paso
posible es pendiente -> pagada, mediante `register_payment`, y no tiene vuelta.
"""

import logging

from sqlalchemy.orm import Session

from agrostock.exceptions import PaymentError
from agrostock.models import Client, Invoice, SaleType
from agrostock.utils.money import ZERO, round2, to_decimal

logger = logging.getLogger(__name__)


def register_payment(invoice: Invoice) -> None:
    """Marca la factura como pagada y descuenta su total del saldo del cliente."""
    client = invoice.client
    if client is None:
        raise PaymentError(PaymentError.NO_CLIENT)

    if invoice.sale_type != SaleType.CREDIT:
        raise PaymentError(PaymentError.NOT_CREDIT_SALE)

    if invoice.paid:
        raise PaymentError(PaymentError.ALREADY_PAID)

    total = to_decimal(invoice.total)
    if total <= 0:
        raise PaymentError(PaymentError.NON_POSITIVE_TOTAL)

    new_balance = to_decimal(client.outstanding_balance) - total
    client.outstanding_balance = round2(max(ZERO, new_balance))
    invoice.paid = True


def pay_invoice(db: Session, invoice: Invoice) -> Invoice:
    try:
        if invoice.client is not None:
            invoice.client = (
                db.query(Client)
                .filter(Client.code == invoice.client.code)
                .populate_existing()
                .with_for_update()
                .first()
            )
        register_payment(invoice)
        db.commit()
    except PaymentError as exc:
        db.rollback()
        logger.warning("Pago rechazado para la factura %s: %s", invoice.number, exc.reason)
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(invoice)
    logger.info(
        "Pago registrado: factura %s, cliente %s, saldo %s",
        invoice.number,
        invoice.client_code,
        invoice.client.outstanding_balance,
    )
    return invoice
