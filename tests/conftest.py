from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from cafe_pos.config.settings import Settings
from cafe_pos.main import create_app
from cafe_pos.shared.database.models import Customer, Product, Sale


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'pos_test.db'}",
        auto_create_schema=True,
        log_level="WARNING",
        sqlite_busy_timeout=30
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # El context manager ejecuta el lifespan: crea tablas y el trabajador del sistema
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(app, client):
    return app.state.session_factory


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_customer(session_factory):
    def _make(name="Ana Torres", tier="normal", is_active=True):
        session = session_factory()
        try:
            customer = Customer(name=name, tier=tier, is_active=is_active)
            session.add(customer)
            session.commit()
            return customer.id
        finally:
            session.close()
    return _make


@pytest.fixture
def make_product(session_factory):
    counter = {"n": 0}

    def _make(price="3.00", stock=10, name=None, code=None, is_active=True):
        counter["n"] += 1
        session = session_factory()
        try:
            product = Product(
                code=code or f"P{counter['n']:03d}",
                name=name or f"Producto {counter['n']}",
                price=Decimal(price),
                stock=stock,
                is_active=is_active
            )
            session.add(product)
            session.commit()
            return product.id
        finally:
            session.close()
    return _make


@pytest.fixture
def stock_of(session_factory):
    def _stock(product_id):
        session = session_factory()
        try:
            return session.get(Product, product_id).stock
        finally:
            session.close()
    return _stock


@pytest.fixture
def sales_count(session_factory):
    def _count():
        session = session_factory()
        try:
            return session.query(Sale).count()
        finally:
            session.close()
    return _count
