# orders_api/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from orders_api.api.deps import get_broadcaster, get_current_customer
from orders_api.data.database import get_db
from orders_api.domain.exceptions import NotFoundError, StoreError, ValidationError
from orders_api.domain.schemas import (
    MessageOut,
    OrderCreate,
    OrderCreatedOut,
    OrderOut,
    OrderUpdate,
    OrderUpdatedOut,
)
from orders_api.services.notification_service import Broadcaster
from orders_api.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    broadcaster: Broadcaster = Depends(get_broadcaster),
):
    return OrderService(db, broadcaster)


def database_error(e: StoreError) -> HTTPException:
    return HTTPException(status_code=500, detail={"message": "Database error", "details": str(e)})


@router.post(
    "/",
    response_model=OrderCreatedOut,
    status_code=201,
    dependencies=[Depends(get_current_customer)],
)
def create_order(payload: OrderCreate, svc: OrderService = Depends(get_service)):
    """
    Creates an order with its line items.
    Invalid items are skipped and reported in itemResults.
    """
    try:
        return svc.create_order(payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise database_error(e)


@router.get("/", response_model=List[OrderOut])
def list_orders(svc: OrderService = Depends(get_service)):
    try:
        return svc.list_orders()
    except StoreError as e:
        raise database_error(e)


@router.get("/mine", response_model=List[OrderOut])
def list_my_orders(
    customer_id: int = Depends(get_current_customer),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.list_customer_orders(customer_id)
    except StoreError as e:
        raise database_error(e)


@router.get("/user/{customer_id}", response_model=List[OrderOut])
def list_customer_orders(
    customer_id: int = Path(..., gt=0),
    current_customer: int = Depends(get_current_customer),
    svc: OrderService = Depends(get_service),
):
    """
    Orders of one customer, visible only to that customer.
    """
    if current_customer != customer_id:
        raise HTTPException(status_code=403, detail="Access denied")

    try:
        return svc.list_customer_orders(customer_id)
    except StoreError as e:
        raise database_error(e)


@router.put(
    "/active-order/{order_id}",
    response_model=OrderUpdatedOut,
    dependencies=[Depends(get_current_customer)],
)
def update_order(
    payload: OrderUpdate,
    order_id: int = Path(..., gt=0),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_order(order_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise database_error(e)


@router.delete(
    "/{order_id}",
    response_model=MessageOut,
    dependencies=[Depends(get_current_customer)],
)
def delete_order(
    order_id: int = Path(..., gt=0),
    svc: OrderService = Depends(get_service),
):
    try:
        svc.delete_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise database_error(e)

    return MessageOut(message="Order deleted successfully")
