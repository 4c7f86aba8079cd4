"""Shared pytest fixtures for the ERP test-suite."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from app import create_app
from config import TestConfig
from extensions import db
from modules.reference.employees.models import Employee
from modules.reference.partners.models import Partner, PartnerType
from modules.reference.products.models import Product
from modules.transactions import services
from modules.transactions.models import TransactionStatus, TransactionType


@pytest.fixture
def app():
    """Fresh application bound to an in-memory SQLite database, context pushed."""

    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(app) -> Callable[..., Product]:
    counter = {"n": 0}

    def _make(*, code: str | None = None, name: str | None = None, stock_qty: float = 0.0,
              purchase_price: float = 10.0, sales_price: float = 15.0) -> Product:
        counter["n"] += 1
        product = Product(
            code=code or f"P{counter['n']:03d}",
            name=name or f"Product {counter['n']}",
            category="General",
            unit="Unit",
            purchase_price=purchase_price,
            sales_price=sales_price,
            stock_qty=stock_qty,
        )
        db.session.add(product)
        db.session.commit()
        return product

    return _make


@pytest.fixture
def partner(app) -> Partner:
    p = Partner(type=PartnerType.CUSTOMER.value, name="John Doe Corp", email="john@example.com")
    db.session.add(p)
    db.session.commit()
    return p


@pytest.fixture
def supplier(app) -> Partner:
    p = Partner(type=PartnerType.SUPPLIER.value, name="Global Tech Ltd")
    db.session.add(p)
    db.session.commit()
    return p


@pytest.fixture
def employee(app) -> Employee:
    e = Employee(name="Emma Wilson", position="Sales", department="Sales", salary=5000)
    db.session.add(e)
    db.session.commit()
    return e


@pytest.fixture
def make_transaction(app) -> Callable[..., object]:
    """Create a document through the lifecycle service; items are (product, qty, price) tuples."""

    counter = {"n": 0}

    def _make(tx_type: TransactionType, items=(), *, number: str | None = None,
              tx_date: date = date(2024, 2, 1), status: TransactionStatus = TransactionStatus.DRAFT,
              partner_id=None, employee_id=None):
        counter["n"] += 1
        lines = tuple(
            services.ItemLine(product_id=p.id, qty=qty, price=price, subtotal=qty * price)
            for p, qty, price in items
        )
        cmd = services.CreateTransactionCommand(
            type=tx_type,
            number=number or f"{tx_type.value}-{counter['n']:04d}",
            date=tx_date,
            partner_id=partner_id,
            employee_id=employee_id,
            status=status,
            total_amount=sum(line.subtotal for line in lines),
            items=lines,
        )
        return services.create_transaction(cmd)

    return _make


@pytest.fixture
def stock_of(app) -> Callable[[int], float]:
    """Read the committed stock level of a product, bypassing the identity map."""

    def _stock(product_id: int) -> float:
        db.session.expire_all()
        return db.session.get(Product, product_id).stock_qty

    return _stock
