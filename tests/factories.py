"""Constructores de entidades en memoria para las pruebas."""

from decimal import Decimal

from agrostock.models import Category, Client, Invoice, Product, SaleType, Supplier


def make_category(**overrides):
    data = dict(name="Fertilizantes", description="Abonos y fertilizantes", is_active=True)
    data.update(overrides)
    return Category(**data)


def make_supplier(**overrides):
    data = dict(
        code="PROV-001",
        legal_name="Distribuidora Agrícola del Norte S.A.",
        trade_name="AgroNorte",
        supplier_type="Agroquímicos",
        phone="2222-0000",
        handles_credit=False,
        credit_days=0,
        credit_limit=Decimal("0.00"),
        outstanding_balance=Decimal("0.00"),
        is_active=True,
    )
    data.update(overrides)
    return Supplier(**data)


def make_product(**overrides):
    data = dict(
        code="FER-001",
        name="Urea 46%",
        unit_of_measure="saco",
        current_stock=Decimal("0.00"),
        minimum_stock=Decimal("5.00"),
        purchase_price=Decimal("10.00"),
        sale_price=Decimal("12.00"),
        is_active=True,
    )
    data.update(overrides)
    return Product(**data)


def make_client(**overrides):
    data = dict(
        code="CLI-001",
        name="Finca La Esperanza",
        client_type="Productor",
        phone="8888-1234",
        allows_credit=True,
        credit_limit=Decimal("500.00"),
        outstanding_balance=Decimal("0.00"),
        is_active=True,
    )
    data.update(overrides)
    return Client(**data)


def make_invoice(client=None, **overrides):
    data = dict(
        number="FAC-000001",
        client=client,
        sale_type=SaleType.CREDIT,
        paid=False,
        tax_rate=Decimal("15.00"),
    )
    data.update(overrides)
    return Invoice(**data)
