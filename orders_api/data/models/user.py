#orders_api/data/models/user.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from orders_api.data.database import Base


class UserModel(Base):
    """A customer; orders reference it through orders.customer_id."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    orders = relationship("OrderModel", back_populates="customer")
