#orders_api/data/models/order.py
from sqlalchemy import Column, Integer, ForeignKey, String, Date, Time, Boolean
from sqlalchemy.orm import relationship

from orders_api.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_code = Column(String(36), nullable=False, unique=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    hour = Column(Time, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    customer = relationship("UserModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
