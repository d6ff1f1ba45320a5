"""Unit tests for regrouping flat join rows into nested orders."""

import datetime as dt
from decimal import Decimal

from orders_api.services.order_assembly import assemble_orders


def _row(order_id, item_id=None, product_id=None, date="2024-05-01", hour="10:00:00"):
    return {
        "order_id": order_id,
        "order_code": f"code-{order_id}",
        "customer_id": 1,
        "date": dt.date.fromisoformat(date),
        "hour": dt.time.fromisoformat(hour),
        "is_active": True,
        "order_item_id": item_id,
        "product_id": product_id,
        "quantity": 1 if item_id else None,
        "color": "red" if item_id else None,
        "price": Decimal("10.00") if item_id else None,
    }


def test_empty_rows():
    assert assemble_orders([]) == []


def test_groups_rows_by_order_in_encounter_order():
    rows = [
        _row(3, item_id=30, product_id=1),
        _row(3, item_id=31, product_id=2),
        _row(1, item_id=10, product_id=1),
        _row(2),
    ]

    orders = assemble_orders(rows)

    assert [o.order_id for o in orders] == [3, 1, 2]
    assert [i.order_item_id for i in orders[0].items] == [30, 31]
    assert [i.order_item_id for i in orders[1].items] == [10]
    assert orders[2].items == []


def test_header_fields_come_from_first_row():
    orders = assemble_orders([_row(5, item_id=50, product_id=7)])

    order = orders[0]
    assert order.order_code == "code-5"
    assert order.date == dt.date(2024, 5, 1)
    assert order.hour == dt.time(10, 0)
    assert order.items[0].price == Decimal("10.00")


def test_items_never_leak_between_orders():
    rows = [_row(n, item_id=n * 10 + k, product_id=k) for n in (1, 2, 3) for k in range(n)]
    rows.append(_row(4))

    orders = assemble_orders(rows)

    assert len(orders) == 4
    for order in orders:
        assert all(i.order_item_id // 10 == order.order_id for i in order.items)
    assert [len(o.items) for o in orders] == [1, 2, 3, 0]
