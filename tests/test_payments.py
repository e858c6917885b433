from decimal import Decimal

import pytest

from agrostock.exceptions import PaymentError
from agrostock.models import Client, Invoice, Product, SaleType
from agrostock.services.invoice_engine import add_line, create_invoice
from agrostock.services.payments import pay_invoice, register_payment
from tests.factories import make_client, make_invoice, make_product


def _invoice(client, total=Decimal("138.00"), **overrides):
    invoice = make_invoice(client=client, **overrides)
    invoice.total = total
    return invoice


def test_payment_discounts_total_from_balance():
    client = make_client(outstanding_balance=Decimal("200.00"))
    invoice = _invoice(client)

    register_payment(invoice)

    assert invoice.paid is True
    assert client.outstanding_balance == Decimal("62.00")


def test_balance_never_goes_negative():
    client = make_client(outstanding_balance=Decimal("50.00"))
    invoice = _invoice(client)

    register_payment(invoice)

    assert client.outstanding_balance == Decimal("0.00")


@pytest.mark.parametrize("build, reason", [
    (lambda: _invoice(None), PaymentError.NO_CLIENT),
    (lambda: _invoice(make_client(), sale_type=SaleType.CASH), PaymentError.NOT_CREDIT_SALE),
    (lambda: _invoice(make_client(), paid=True), PaymentError.ALREADY_PAID),
    (lambda: _invoice(make_client(), total=Decimal("0.00")), PaymentError.NON_POSITIVE_TOTAL),
    (lambda: _invoice(make_client(), total=None), PaymentError.NON_POSITIVE_TOTAL),
])
def test_rejected_payments(build, reason):
    invoice = build()
    with pytest.raises(PaymentError) as exc_info:
        register_payment(invoice)
    assert exc_info.value.reason == reason
    assert exc_info.value.status_code == 409


def test_rejected_payment_changes_nothing():
    client = make_client(outstanding_balance=Decimal("80.00"))
    invoice = _invoice(client, sale_type=SaleType.CASH)

    with pytest.raises(PaymentError):
        register_payment(invoice)

    assert invoice.paid is False
    assert client.outstanding_balance == Decimal("80.00")


def test_checks_run_in_order():
    # Contado y ya pagada: gana la primera regla que falla
    invoice = _invoice(make_client(), sale_type=SaleType.CASH, paid=True)
    with pytest.raises(PaymentError) as exc_info:
        register_payment(invoice)
    assert exc_info.value.reason == PaymentError.NOT_CREDIT_SALE


def test_payment_messages_are_readable():
    error = PaymentError(PaymentError.ALREADY_PAID)
    assert error.message == "La factura ya está pagada"
    assert str(error) == error.message


def test_scenario_pay_credit_invoice(db, catalog, credit_client):
    invoice = make_invoice(client=credit_client)
    add_line(invoice, catalog.product, Decimal("10"), Decimal("12.00"))
    create_invoice(db, invoice)

    pay_invoice(db, invoice)

    db.expire_all()
    stored = db.query(Invoice).filter_by(number="FAC-000001").one()
    assert stored.paid is True
    assert db.query(Client).filter_by(code="CLI-001").one().outstanding_balance == Decimal("0.00")

    with pytest.raises(PaymentError) as exc_info:
        pay_invoice(db, stored)
    assert exc_info.value.reason == PaymentError.ALREADY_PAID

    db.expire_all()
    assert db.query(Client).filter_by(code="CLI-001").one().outstanding_balance == Decimal("0.00")


def test_pay_cash_invoice_is_rolled_back(db, catalog, credit_client):
    invoice = make_invoice(client=credit_client, sale_type=SaleType.CASH)
    add_line(invoice, catalog.product, Decimal("1"), Decimal("12.00"))
    create_invoice(db, invoice)

    with pytest.raises(PaymentError):
        pay_invoice(db, invoice)

    db.expire_all()
    assert db.query(Invoice).filter_by(number="FAC-000001").one().paid is False


def test_payment_rereads_balance_committed_by_another_session(db, session_factory, catalog, credit_client):
    invoice = make_invoice(client=credit_client)
    add_line(invoice, catalog.product, Decimal("10"), Decimal("12.00"))
    create_invoice(db, invoice)

    first, second = session_factory(), session_factory()
    try:
        pending = first.query(Invoice).filter_by(number="FAC-000001").one()
        assert pending.client.outstanding_balance == Decimal("138.00")

        other = make_invoice(client=second.query(Client).filter_by(code="CLI-001").one(),
                             number="FAC-000002", tax_rate=Decimal("0"))
        add_line(other, second.query(Product).filter_by(code="FER-001").one(), Decimal("10"), Decimal("10.00"))
        create_invoice(second, other)

        pay_invoice(first, pending)
    finally:
        first.close()
        second.close()

    db.expire_all()
    assert db.query(Client).filter_by(code="CLI-001").one().outstanding_balance == Decimal("100.00")
