from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agrostock.database import Base, get_db
from agrostock.main import app
from agrostock.models import Role, User
from agrostock.security import get_current_user
from tests.factories import make_category, make_client, make_product, make_supplier


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user(db):
    user = User(username="tester", full_name="Tester", password_hash="not-used", role=Role.ADMINISTRADOR)
    db.add(user)
    db.commit()
    return SimpleNamespace(id=user.id, username=user.username, role=user.role)


@pytest.fixture
def catalog(db):
    """Categoría, proveedor y producto P (compra 10.00, venta 12.00, stock 0)."""
    category = make_category()
    supplier = make_supplier()
    product = make_product(category=category, supplier=supplier)
    db.add_all([category, supplier, product])
    db.commit()
    return SimpleNamespace(category=category, supplier=supplier, product=product)


@pytest.fixture
def credit_client(db):
    """Cliente C: crédito habilitado, límite 500.00, saldo 0.00."""
    client = make_client()
    db.add(client)
    db.commit()
    return client


@pytest.fixture
def cash_client(db):
    client = make_client(
        code="CLI-002",
        name="Cliente de Contado",
        allows_credit=False,
        credit_limit=0,
    )
    db.add(client)
    db.commit()
    return client


@pytest.fixture
def api(session_factory, user):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: user
    yield TestClient(app)
    app.dependency_overrides.clear()
