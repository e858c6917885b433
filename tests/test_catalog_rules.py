from decimal import Decimal

import pytest

from agrostock.exceptions import ValidationError
from agrostock.services.catalog import (
    deactivate_client,
    deactivate_product,
    validate_category,
    validate_client,
    validate_product_prices,
    validate_supplier,
)
from tests.factories import make_category, make_client, make_product, make_supplier


def _key(func, entity):
    with pytest.raises(ValidationError) as exc_info:
        func(entity)
    return exc_info.value.key


# --- Categorías ---

def test_category_name_is_trimmed():
    category = make_category(name="  Semillas  ", description="   ")
    validate_category(category)
    assert category.name == "Semillas"
    assert category.description is None


@pytest.mark.parametrize("name, key", [
    (None, "category_name_required"),
    ("   ", "category_name_required"),
    ("ab", "category_name_too_short"),
    ("x" * 61, "category_name_too_long"),
])
def test_invalid_category_names(name, key):
    assert _key(validate_category, make_category(name=name)) == key


def test_category_name_boundaries():
    validate_category(make_category(name="abc"))
    validate_category(make_category(name="x" * 60))


# --- Proveedores ---

def test_supplier_needs_some_contact():
    supplier = make_supplier(phone=None, mobile="  ", email=None)
    assert _key(validate_supplier, supplier) == "supplier_contact_required"


def test_supplier_without_credit_is_cleared():
    supplier = make_supplier(handles_credit=False, credit_days=30, credit_limit=Decimal("900"))
    validate_supplier(supplier)
    assert supplier.credit_days == 0
    assert supplier.credit_limit == Decimal("0.00")


@pytest.mark.parametrize("overrides, key", [
    ({"credit_days": 0, "credit_limit": Decimal("100")}, "supplier_credit_days_positive"),
    ({"credit_days": 30, "credit_limit": Decimal("0")}, "supplier_credit_limit_positive"),
    ({"credit_days": 30, "credit_limit": Decimal("100"), "outstanding_balance": Decimal("100.01")},
     "supplier_balance_over_limit"),
])
def test_supplier_credit_rules(overrides, key):
    supplier = make_supplier(handles_credit=True, **overrides)
    assert _key(validate_supplier, supplier) == key


def test_supplier_with_valid_credit():
    supplier = make_supplier(handles_credit=True, credit_days=30,
                             credit_limit=Decimal("1000"), outstanding_balance=None)
    validate_supplier(supplier)
    assert supplier.outstanding_balance == Decimal("0.00")


# --- Clientes ---

def test_client_needs_phone_or_email():
    client = make_client(phone="", email=None)
    assert _key(validate_client, client) == "client_contact_required"


def test_client_with_email_only_is_valid():
    validate_client(make_client(phone=None, email="finca@example.com"))


def test_client_without_credit_is_zeroed():
    client = make_client(allows_credit=False, credit_limit=Decimal("300"), outstanding_balance=Decimal("20"))
    validate_client(client)
    assert client.credit_limit == Decimal("0.00")
    assert client.outstanding_balance == Decimal("0.00")


def test_client_credit_limit_must_be_positive():
    client = make_client(credit_limit=Decimal("0"))
    assert _key(validate_client, client) == "client_credit_limit_positive"


def test_client_balance_over_limit():
    client = make_client(credit_limit=Decimal("500"), outstanding_balance=Decimal("500.01"))
    assert _key(validate_client, client) == "client_balance_over_limit"


def test_client_blocked_by_debt_flag():
    assert make_client(outstanding_balance=Decimal("500.00")).is_blocked_by_debt
    assert not make_client(outstanding_balance=Decimal("499.99")).is_blocked_by_debt
    assert not make_client(allows_credit=False).is_blocked_by_debt


def test_client_with_debt_cannot_be_deactivated():
    client = make_client(outstanding_balance=Decimal("10.00"))
    with pytest.raises(ValidationError) as exc_info:
        deactivate_client(client)
    assert exc_info.value.key == "client_has_debt"
    assert "10.00" in exc_info.value.message
    assert client.is_active is True


def test_client_without_debt_is_deactivated():
    client = make_client()
    deactivate_client(client)
    assert client.is_active is False


# --- Productos ---

def test_sale_price_below_purchase_is_rejected():
    product = make_product(purchase_price=Decimal("10.00"), sale_price=Decimal("9.99"))
    assert _key(validate_product_prices, product) == "product_sale_below_purchase"


def test_product_prices_equal_are_valid():
    validate_product_prices(make_product(purchase_price=Decimal("10.00"), sale_price=Decimal("10.00")))


def test_deactivate_product():
    product = make_product()
    deactivate_product(product)
    assert product.is_active is False
