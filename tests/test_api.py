from decimal import Decimal

import pytest

from agrostock.models import Role, User
from agrostock.security import get_password_hash


@pytest.fixture
def stocked(api, catalog):
    """Producto FER-001 con 100 sacos en bodega."""
    response = api.post("/api/inventory/movements", json={
        "product_code": "FER-001", "movement_type": "IN", "quantity": "100",
    })
    assert response.status_code == 200
    return catalog


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_login_returns_token(api, db):
    db.add(User(username="vendedor", full_name="Vendedor", role=Role.VENDEDOR,
                password_hash=get_password_hash("secreto123")))
    db.commit()

    response = api.post("/api/auth/login", data={"username": "vendedor", "password": "secreto123"})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"

    response = api.post("/api/auth/login", data={"username": "vendedor", "password": "otra"})
    assert response.status_code == 401


# --- Catálogo ---

def test_create_category_and_reject_duplicate(api):
    response = api.post("/api/categories/", json={"name": "  Semillas "})
    assert response.status_code == 200
    assert response.json()["name"] == "Semillas"

    response = api.post("/api/categories/", json={"name": "Semillas"})
    assert response.status_code == 400
    assert response.json()["code"] == "category_name_duplicated"


def test_create_product_starts_without_stock(api, catalog):
    response = api.post("/api/products/", json={
        "code": "SEM-001",
        "name": "Semilla de maíz",
        "category_id": catalog.category.id,
        "supplier_code": "PROV-001",
        "minimum_stock": "10",
        "purchase_price": "25.00",
        "sale_price": "30.00",
    })
    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["current_stock"]) == 0
    assert body["is_below_minimum"] is True


def test_product_sale_below_purchase(api, catalog):
    response = api.put("/api/products/FER-001", json={"sale_price": "9.00"})
    assert response.status_code == 400
    assert response.json()["code"] == "product_sale_below_purchase"
    assert Decimal(api.get("/api/products/FER-001").json()["sale_price"]) == Decimal("12.00")


def test_unknown_product_is_404(api):
    response = api.get("/api/products/NOPE")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


def test_deactivated_product_leaves_listing(api, catalog):
    assert api.delete("/api/products/FER-001").json()["is_active"] is False
    assert api.get("/api/products/").json() == []
    assert len(api.get("/api/products/?include_inactive=true").json()) == 1


def test_export_products_excel(api, catalog):
    response = api.get("/api/products/export/excel")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    # Los .xlsx son archivos zip
    assert response.content[:2] == b"PK"


# --- Inventario ---

def test_movements_update_stock(api, stocked):
    response = api.post("/api/inventory/movements", json={
        "product_code": "FER-001", "movement_type": "OUT", "quantity": "30",
    })
    assert response.status_code == 200
    assert Decimal(response.json()["stock_after"]) == Decimal("70.00")
    assert response.json()["user_name"] == "tester"

    kardex = api.get("/api/inventory/kardex/FER-001").json()
    assert len(kardex) == 2
    assert Decimal(api.get("/api/products/FER-001").json()["current_stock"]) == Decimal("70.00")


def test_out_beyond_stock_is_conflict(api, stocked):
    response = api.post("/api/inventory/movements", json={
        "product_code": "FER-001", "movement_type": "OUT", "quantity": "150",
    })
    assert response.status_code == 409
    assert response.json()["code"] == "insufficient_stock"
    assert "100.00" in response.json()["detail"]
    assert Decimal(api.get("/api/products/FER-001").json()["current_stock"]) == Decimal("100.00")


@pytest.mark.parametrize("payload, code", [
    ({"movement_type": "TRANSFER", "quantity": "5"}, "unsupported_movement_type"),
    ({"movement_type": "IN", "quantity": "0"}, "movement_quantity_positive"),
])
def test_invalid_movements(api, catalog, payload, code):
    response = api.post("/api/inventory/movements", json={"product_code": "FER-001", **payload})
    assert response.status_code == 400
    assert response.json()["code"] == code


# --- Facturación ---

def _sell(api, quantity="10", unit_price="12.00", **extra):
    payload = {
        "client_code": "CLI-001",
        "sale_type": "CREDIT",
        "lines": [{"product_code": "FER-001", "quantity": quantity, "unit_price": unit_price}],
    }
    payload.update(extra)
    return api.post("/api/invoices/", json=payload)


def test_credit_invoice_flow(api, catalog, credit_client):
    response = _sell(api)
    assert response.status_code == 200
    invoice = response.json()
    assert invoice["number"] == "FAC-000001"
    assert Decimal(invoice["subtotal"]) == Decimal("120.00")
    assert Decimal(invoice["tax"]) == Decimal("18.00")
    assert Decimal(invoice["total"]) == Decimal("138.00")
    assert Decimal(api.get("/api/clients/CLI-001").json()["outstanding_balance"]) == Decimal("138.00")

    pending = api.get("/api/clients/CLI-001/pending-invoices").json()
    assert [inv["number"] for inv in pending] == ["FAC-000001"]

    response = _sell(api, quantity="1", unit_price="400.00", tax_rate="0")
    assert response.status_code == 409
    assert response.json()["code"] == "credit_limit_exceeded"

    response = api.post("/api/invoices/FAC-000001/pay")
    assert response.status_code == 200
    assert response.json()["paid"] is True
    assert Decimal(response.json()["outstanding_balance"]) == Decimal("0.00")

    response = api.post("/api/invoices/FAC-000001/pay")
    assert response.status_code == 409
    assert response.json()["code"] == "already_paid"

    assert api.get("/api/clients/CLI-001/pending-invoices").json() == []


def test_invoice_numbers_are_sequential(api, catalog, credit_client):
    _sell(api, quantity="1", sale_type="CASH")
    response = _sell(api, quantity="1", sale_type="CASH")
    assert response.json()["number"] == "FAC-000002"


def test_invoice_uses_list_price_when_missing(api, catalog, credit_client):
    response = api.post("/api/invoices/", json={
        "client_code": "CLI-001",
        "lines": [{"product_code": "FER-001", "quantity": "2"}],
    })
    assert response.status_code == 200
    assert Decimal(response.json()["lines"][0]["unit_price"]) == Decimal("12.00")
    assert response.json()["sale_type"] == "CASH"


def test_invoice_below_purchase_price(api, catalog, credit_client):
    response = _sell(api, unit_price="9.99")
    assert response.status_code == 400
    assert response.json()["code"] == "line_below_purchase_price"


def test_credit_sale_to_cash_client(api, catalog, cash_client):
    response = _sell(api, client_code="CLI-002")
    assert response.status_code == 400
    assert response.json()["code"] == "client_without_credit"


def test_invoice_does_not_touch_stock(api, stocked, credit_client):
    _sell(api)
    assert Decimal(api.get("/api/products/FER-001").json()["current_stock"]) == Decimal("100.00")


def test_update_invoice_counts_balance_once(api, catalog, credit_client):
    _sell(api)
    response = api.put("/api/invoices/FAC-000001", json={
        "lines": [{"product_code": "FER-001", "quantity": "20", "unit_price": "12.00"}],
    })
    assert response.status_code == 200
    assert Decimal(response.json()["total"]) == Decimal("276.00")
    assert len(response.json()["lines"]) == 1
    assert Decimal(api.get("/api/clients/CLI-001").json()["outstanding_balance"]) == Decimal("276.00")


def test_paid_invoice_is_locked(api, catalog, credit_client):
    _sell(api)
    api.post("/api/invoices/FAC-000001/pay")
    response = api.put("/api/invoices/FAC-000001", json={"tax_rate": "0"})
    assert response.status_code == 400
    assert response.json()["code"] == "invoice_paid_locked"


def test_client_with_debt_cannot_be_deactivated(api, catalog, credit_client):
    _sell(api)
    response = api.delete("/api/clients/CLI-001")
    assert response.status_code == 400
    assert response.json()["code"] == "client_has_debt"


def test_client_with_debt_cannot_be_deactivated_by_update(api, catalog, credit_client):
    _sell(api)
    response = api.put("/api/clients/CLI-001", json={"is_active": False, "allows_credit": False})
    assert response.status_code == 400
    assert response.json()["code"] == "client_has_debt"

    client = api.get("/api/clients/CLI-001").json()
    assert client["is_active"] is True
    assert Decimal(client["outstanding_balance"]) == Decimal("138.00")


def test_client_without_debt_can_be_deactivated_by_update(api, credit_client):
    response = api.put("/api/clients/CLI-001", json={"is_active": False})
    assert response.status_code == 200
    assert response.json()["is_active"] is False


# --- Reportes ---

def test_pdf_reports(api, stocked, credit_client):
    _sell(api)
    for url in ("/api/reports/products.pdf", "/api/reports/movements.pdf", "/api/invoices/FAC-000001/pdf"):
        response = api.get(url)
        assert response.status_code == 200, url
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")


def test_low_stock_report(api, catalog):
    codes = [p["code"] for p in api.get("/api/reports/low-stock").json()]
    assert codes == ["FER-001"]


def test_receivables_report(api, catalog, credit_client, cash_client):
    _sell(api)
    report = api.get("/api/reports/receivables").json()
    assert Decimal(report["total_receivable"]) == Decimal("138.00")
    assert [row["client_code"] for row in report["clients"]] == ["CLI-001"]
    assert report["clients"][0]["is_blocked_by_debt"] is False
