# orders_api/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from orders_api.data.database import SessionLocal, init_db
from orders_api.data.models import ProductModel, UserModel
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_USERS = [
    {"id": 1, "name": "Demo Customer"},
    {"id": 2, "name": "Second Customer"},
]

DEMO_PRODUCTS = [
    {"id": 1, "name": "Keyboard", "price": Decimal("199.99")},
    {"id": 2, "name": "Mouse", "price": Decimal("49.50")},
    {"id": 3, "name": "Monitor", "price": Decimal("899.00")},
]


def seed(db: Session | None = None) -> bool:
    """Inserts demo customers and products. Returns False if data was already there."""
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).first() or db.query(ProductModel).first():
            return False

        db.add_all(UserModel(**u) for u in DEMO_USERS)
        db.add_all(ProductModel(**p) for p in DEMO_PRODUCTS)
        db.commit()

        logger.info(f"Seeded {len(DEMO_USERS)} users and {len(DEMO_PRODUCTS)} products")
        return True
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    seed()
