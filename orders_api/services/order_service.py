# orders_api/services/order_service.py
import uuid
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orders_api.data.models.order import OrderModel
from orders_api.data.models.order_item import OrderItemModel
from orders_api.data.models.product import ProductModel
from orders_api.domain.exceptions import EmptyOrderError, NotFoundError, StoreError
from orders_api.domain.schemas import (
    ItemPatchResult,
    ItemResult,
    OrderCreate,
    OrderCreatedOut,
    OrderItemIn,
    OrderItemOut,
    OrderOut,
    OrderUpdate,
    OrderUpdatedOut,
)
from orders_api.repos.order_repo import OrderRepo
from orders_api.repos.product_repo import ProductRepo
from orders_api.repos.user_repo import UserRepo
from orders_api.services.notification_service import Broadcaster
from orders_api.services.order_assembly import assemble_orders
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)


def _rejection_reason(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    field = first["loc"][0] if first["loc"] else "item"
    return f"invalid {field}: {first['msg']}"


class OrderService:
    """
    Order lifecycle use cases.
    commands (create, update, delete) write through OrderRepo and broadcast an event on success,
    queries (list) only read.
    """

    def __init__(self, db: Session, broadcaster: Broadcaster):
        self.repo = OrderRepo(db)
        self.users = UserRepo(db)
        self.products = ProductRepo(db)
        self.broadcaster = broadcaster

    #query
    def list_orders(self) -> List[OrderOut]:
        return self._read_orders(None)

    def list_customer_orders(self, customer_id: int) -> List[OrderOut]:
        return self._read_orders(customer_id)

    def _read_orders(self, customer_id: int | None) -> List[OrderOut]:
        try:
            rows = self.repo.fetch_order_rows(customer_id)
        except SQLAlchemyError as e:
            logger.error(f"Fetching orders failed: {e}")
            raise StoreError(str(e)) from e

        return assemble_orders(rows)

    #commands
    def create_order(self, payload: OrderCreate) -> OrderCreatedOut:
        """
        Use case: create an order with its line items.

        1. customer must exist
        2. header is inserted (is_active = True) with a fresh order code
        3. each item is validated on its own, bad ones are rejected and skipped
        4. no accepted items -> rollback, header is gone with it
        5. accepted items are inserted with the catalog price at this moment
        6. commit and broadcast order_created
        """
        try:
            if not self.users.customer_exists(payload.customer_id):
                raise NotFoundError("Customer not found")

            order = self.repo.add_order(
                OrderModel(
                    order_code=str(uuid.uuid4()),
                    customer_id=payload.customer_id,
                    date=payload.date,
                    hour=payload.hour,
                    is_active=True,
                )
            )

            accepted: List[OrderItemModel] = []
            results: List[ItemResult] = []

            for index, raw in enumerate(payload.items):
                raw_product_id = raw.get("productID") if isinstance(raw, dict) else None
                item, product, reason = self._check_item(raw)

                if reason:
                    logger.warning(f"Skipping item {index} of order {order.id}: {reason}")
                    results.append(
                        ItemResult(index=index, product_id=raw_product_id, status="rejected", reason=reason)
                    )
                    continue

                accepted.append(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=item.product_id,
                        quantity=item.quantity,
                        color=item.color,
                        price=product.price,
                    )
                )
                results.append(ItemResult(index=index, product_id=item.product_id, status="accepted"))

            if not accepted:
                self.repo.rollback()
                logger.warning(f"Order for customer {payload.customer_id} had no valid items, rolled back")
                raise EmptyOrderError("Order contained no valid products or product details.")

            self.repo.add_order_items(accepted)
            created = self._to_out(order, accepted)
            self.repo.commit()

        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Creating order failed: {e}")
            raise StoreError(str(e)) from e

        logger.info(
            f"Order {created.order_id} ({created.order_code}) created for customer "
            f"{created.customer_id} with {len(accepted)} of {len(payload.items)} item(s)"
        )

        self.broadcaster.publish("order_created", created.model_dump(mode="json", by_alias=True))

        return OrderCreatedOut(**created.model_dump(), item_results=results)

    def _check_item(self, raw: Any) -> Tuple[OrderItemIn | None, ProductModel | None, str | None]:
        try:
            item = OrderItemIn.model_validate(raw)
        except PydanticValidationError as e:
            return None, None, _rejection_reason(e)

        product = self.products.get_product(item.product_id)
        if not product:
            return item, None, f"product {item.product_id} not found"

        return item, product, None

    def update_order(self, order_id: int, payload: OrderUpdate) -> OrderUpdatedOut:
        """
        Use case: partial update of the active flag and of chosen line items.
        Only supplied fields change. Patches for items outside this order
        change nothing and report updated = 0.
        """
        patches = payload.items or []
        results: List[ItemPatchResult] = []

        try:
            if not self.repo.get_order(order_id):
                raise NotFoundError("Order not found")

            if payload.is_active is not None:
                self.repo.update_order_active(order_id, payload.is_active)

            for patch in patches:
                values: Dict[str, Any] = {}
                if patch.quantity is not None:
                    values["quantity"] = patch.quantity
                if patch.color is not None:
                    values["color"] = patch.color

                if not values:
                    results.append(ItemPatchResult(order_item_id=patch.order_item_id, updated=0))
                    continue

                updated = self.repo.update_order_item(order_id, patch.order_item_id, values)
                if updated == 0:
                    logger.warning(f"Order item {patch.order_item_id} not found in order {order_id}")
                results.append(ItemPatchResult(order_item_id=patch.order_item_id, updated=updated))

            self.repo.commit()

        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Updating order {order_id} failed: {e}")
            raise StoreError(str(e)) from e

        logger.info(f"Order {order_id} updated (isActive={payload.is_active}, {len(patches)} item patch(es))")

        self.broadcaster.publish(
            "order_updated",
            {
                "orderID": order_id,
                "isActive": payload.is_active,
                "items": (
                    [p.model_dump(mode="json", by_alias=True, exclude_unset=True) for p in payload.items]
                    if payload.items is not None
                    else None
                ),
            },
        )

        return OrderUpdatedOut(
            message="Order updated successfully",
            order_id=order_id,
            is_active=payload.is_active,
            items=results,
        )

    def delete_order(self, order_id: int) -> None:
        """
        Use case: delete an order, its items go first.
        """
        try:
            self.repo.delete_order_items(order_id)
            if self.repo.delete_order(order_id) == 0:
                self.repo.rollback()
                raise NotFoundError("Order not found")
            self.repo.commit()

        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Deleting order {order_id} failed: {e}")
            raise StoreError(str(e)) from e

        logger.info(f"Order {order_id} deleted")

        self.broadcaster.publish("order_deleted", {"orderID": order_id})

    @staticmethod
    def _to_out(order: OrderModel, items: List[OrderItemModel]) -> OrderOut:
        return OrderOut(
            order_id=order.id,
            order_code=order.order_code,
            customer_id=order.customer_id,
            date=order.date,
            hour=order.hour,
            is_active=order.is_active,
            items=[
                OrderItemOut(
                    order_item_id=i.id,
                    product_id=i.product_id,
                    quantity=i.quantity,
                    color=i.color,
                    price=i.price,
                )
                for i in items
            ],
        )
