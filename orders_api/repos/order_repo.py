# orders_api/repos/order_repo.py
from typing import Any, Dict, List, Mapping

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from orders_api.data.models.order import OrderModel
from orders_api.data.models.order_item import OrderItemModel


class OrderRepo:
    """
    Statements over orders and order_items.
    Nothing here commits on its own, the service decides where the transaction ends.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        #flush so the store assigns order.id
        self.db.flush()
        return order

    def add_order_items(self, items: List[OrderItemModel]) -> List[OrderItemModel]:
        self.db.add_all(items)
        self.db.flush()
        return items

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def fetch_order_rows(self, customer_id: int | None = None) -> List[Mapping[str, Any]]:
        """Flat LEFT JOIN of headers and items, newest orders first."""
        stmt = (
            select(
                OrderModel.id.label("order_id"),
                OrderModel.order_code,
                OrderModel.customer_id,
                OrderModel.date,
                OrderModel.hour,
                OrderModel.is_active,
                OrderItemModel.id.label("order_item_id"),
                OrderItemModel.product_id,
                OrderItemModel.quantity,
                OrderItemModel.color,
                OrderItemModel.price,
            )
            .select_from(OrderModel)
            .outerjoin(OrderItemModel, OrderItemModel.order_id == OrderModel.id)
            .order_by(
                OrderModel.date.desc(),
                OrderModel.hour.desc(),
                OrderModel.id.desc(),
                OrderItemModel.id,
            )
        )
        if customer_id is not None:
            stmt = stmt.where(OrderModel.customer_id == customer_id)

        return self.db.execute(stmt).mappings().all()

    def update_order_active(self, order_id: int, is_active: bool) -> int:
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(is_active=is_active)
        )
        return result.rowcount

    def update_order_item(self, order_id: int, order_item_id: int, values: Dict[str, Any]) -> int:
        result = self.db.execute(
            update(OrderItemModel)
            .where(
                OrderItemModel.id == order_item_id,
                OrderItemModel.order_id == order_id,
            )
            .values(**values)
        )
        return result.rowcount

    def delete_order_items(self, order_id: int) -> int:
        result = self.db.execute(
            delete(OrderItemModel).where(OrderItemModel.order_id == order_id)
        )
        return result.rowcount

    def delete_order(self, order_id: int) -> int:
        result = self.db.execute(delete(OrderModel).where(OrderModel.id == order_id))
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
