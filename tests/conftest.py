import datetime as dt
from decimal import Decimal

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from orders_api.api import create_app
from orders_api.api.deps import get_broadcaster
from orders_api.data.database import Base, get_db
from orders_api.data.models import OrderItemModel, OrderModel, ProductModel, UserModel
from orders_api.utils.settings import JWT_ALGORITHM, JWT_SECRET
from tests.fakes import FakeBroadcaster


def make_token(customer_id: int) -> str:
    return jwt.encode({"id": customer_id}, JWT_SECRET, algorithm=JWT_ALGORITHM)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    """Session with two customers and a small catalog already committed."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    session.add_all([
        UserModel(id=1, name="Alice"),
        UserModel(id=2, name="Bob"),
        ProductModel(id=1, name="Keyboard", price=Decimal("199.99")),
        ProductModel(id=2, name="Mouse", price=Decimal("49.50")),
        ProductModel(id=7, name="Lamp", price=Decimal("25.00")),
    ])
    session.commit()
    yield session
    session.close()


@pytest.fixture()
def broadcaster():
    return FakeBroadcaster()


@pytest.fixture()
def client(db, broadcaster):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth_headers():
    def _headers(customer_id: int = 1) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(customer_id)}"}
    return _headers


@pytest.fixture()
def make_order(db):
    """Insert an order straight into the store: items are (product_id, quantity, color, price)."""
    counter = iter(range(1, 1000))

    def _make(customer_id=1, date="2024-05-01", hour="10:00:00", items=(), is_active=True):
        order = OrderModel(
            order_code=f"code-{next(counter)}",
            customer_id=customer_id,
            date=dt.date.fromisoformat(date),
            hour=dt.time.fromisoformat(hour),
            is_active=is_active,
        )
        db.add(order)
        db.flush()
        for product_id, quantity, color, price in items:
            db.add(OrderItemModel(
                order_id=order.id,
                product_id=product_id,
                quantity=quantity,
                color=color,
                price=Decimal(price),
            ))
        db.commit()
        return order.id

    return _make
