# orders_api/domain/schemas.py
import datetime as dt
import re
from decimal import Decimal
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
HOUR_PATTERN = re.compile(r"^\d{2}:\d{2}:\d{2}$")


class WireModel(BaseModel):
    """Base for schemas whose wire names differ from the attribute names."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class OrderCreate(WireModel):
    """Schema for creating an order.

    Items stay raw here: each one is validated separately by the service so
    a single bad item does not fail the whole request.
    """

    customer_id: int = Field(..., alias="customerID", gt=0, description="Customer ID (> 0)")
    date: dt.date = Field(..., description="Order date, YYYY-MM-DD")
    hour: dt.time = Field(..., description="Order time, HH:MM:SS")
    items: List[Any] = Field(..., min_length=1, description="At least one line item")

    @field_validator("date", mode="before")
    @classmethod
    def check_date_format(cls, value):
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            raise ValueError("Invalid date format (YYYY-MM-DD)")
        return value

    @field_validator("hour", mode="before")
    @classmethod
    def check_hour_format(cls, value):
        if not isinstance(value, str) or not HOUR_PATTERN.match(value):
            raise ValueError("Invalid hour format (HH:MM:SS)")
        return value


class OrderItemIn(WireModel):
    """A single line item of a create request."""

    product_id: int = Field(..., alias="productID", gt=0)
    quantity: Optional[int] = Field(1, gt=0)
    color: str

    @field_validator("quantity", mode="after")
    @classmethod
    def default_quantity(cls, value):
        return 1 if value is None else value

    @field_validator("color")
    @classmethod
    def check_color(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("color must not be empty")
        return value


class OrderItemPatch(WireModel):
    order_item_id: int = Field(..., alias="orderItemID", gt=0)
    quantity: Optional[int] = Field(None, gt=0)
    color: Optional[str] = None

    @field_validator("color")
    @classmethod
    def check_color(cls, value):
        if value is not None and not value.strip():
            raise ValueError("color must not be empty")
        return value


class OrderUpdate(WireModel):
    """Schema for a partial order update; every field is optional."""

    is_active: Optional[bool] = Field(None, alias="isActive")
    items: Optional[List[OrderItemPatch]] = None


class OrderItemOut(WireModel):
    order_item_id: Optional[int] = Field(None, alias="orderItemID")
    product_id: int = Field(..., alias="productID")
    quantity: int
    color: str
    price: Decimal


class OrderOut(WireModel):
    """An order header together with its line items."""

    order_id: int = Field(..., alias="orderID")
    order_code: str = Field(..., alias="orderCode")
    customer_id: int = Field(..., alias="customerID")
    date: dt.date
    hour: dt.time
    is_active: bool = Field(..., alias="isActive")
    items: List[OrderItemOut] = Field(default_factory=list)


class ItemResult(WireModel):
    """What happened to one submitted item during order creation."""

    index: int
    product_id: Any = Field(None, alias="productID")
    status: Literal["accepted", "rejected"]
    reason: Optional[str] = None


class OrderCreatedOut(OrderOut):
    item_results: List[ItemResult] = Field(default_factory=list, alias="itemResults")


class ItemPatchResult(WireModel):
    order_item_id: int = Field(..., alias="orderItemID")
    updated: int


class OrderUpdatedOut(WireModel):
    message: str
    order_id: int = Field(..., alias="orderID")
    is_active: Optional[bool] = Field(None, alias="isActive")
    items: List[ItemPatchResult] = Field(default_factory=list)


class MessageOut(BaseModel):
    message: str
