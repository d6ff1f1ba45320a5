# orders_api/services/order_assembly.py
from typing import Any, Dict, Iterable, List, Mapping

from orders_api.domain.schemas import OrderItemOut, OrderOut


def assemble_orders(rows: Iterable[Mapping[str, Any]]) -> List[OrderOut]:
    """
    Regroups flat order/item join rows into nested orders.

    Every row carries the header columns and at most one item. Orders come
    out in the order their ids are first met, so the store's ORDER BY is kept.
    A header row with a NULL item id (order without items) yields an order
    with an empty item list.
    """
    orders: Dict[int, OrderOut] = {}

    for row in rows:
        order = orders.get(row["order_id"])
        if order is None:
            order = OrderOut(
                order_id=row["order_id"],
                order_code=row["order_code"],
                customer_id=row["customer_id"],
                date=row["date"],
                hour=row["hour"],
                is_active=row["is_active"],
                items=[],
            )
            orders[row["order_id"]] = order

        if row["order_item_id"] is not None:
            order.items.append(
                OrderItemOut(
                    order_item_id=row["order_item_id"],
                    product_id=row["product_id"],
                    quantity=row["quantity"],
                    color=row["color"],
                    price=row["price"],
                )
            )

    return list(orders.values())
