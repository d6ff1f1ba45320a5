"""API tests for DELETE /orders/{order_id}."""

from orders_api.data.models import OrderItemModel, OrderModel


def _counts(db):
    db.expire_all()
    return db.query(OrderModel).count(), db.query(OrderItemModel).count()


def test_deletes_order_and_items(client, auth_headers, make_order, db, broadcaster):
    order_id = make_order(items=[(1, 1, "black", "199.99"), (2, 2, "white", "49.50")])
    kept = make_order(items=[(7, 1, "red", "25.00")])

    resp = client.delete(f"/orders/{order_id}", headers=auth_headers())

    assert resp.status_code == 200
    assert resp.json() == {"message": "Order deleted successfully"}
    assert _counts(db) == (1, 1)
    assert db.get(OrderModel, kept) is not None
    assert broadcaster.events("order_deleted") == [{"orderID": order_id}]


def test_unknown_order_changes_nothing(client, auth_headers, make_order, db, broadcaster):
    make_order(items=[(1, 1, "black", "199.99")])
    before = _counts(db)

    resp = client.delete("/orders/999", headers=auth_headers())

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Order not found"
    assert _counts(db) == before
    assert broadcaster.published == []


def test_deleting_twice_is_not_found(client, auth_headers, make_order):
    order_id = make_order(items=[(1, 1, "black", "199.99")])

    assert client.delete(f"/orders/{order_id}", headers=auth_headers()).status_code == 200
    assert client.delete(f"/orders/{order_id}", headers=auth_headers()).status_code == 404


def test_invalid_order_id(client, auth_headers):
    assert client.delete("/orders/abc", headers=auth_headers()).status_code == 400


def test_requires_token(client, make_order, db):
    order_id = make_order(items=[(1, 1, "black", "199.99")])

    resp = client.delete(f"/orders/{order_id}", headers={"Authorization": "Bearer not-a-token"})

    assert resp.status_code == 403
    assert _counts(db) == (1, 1)
