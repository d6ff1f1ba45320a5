#import all models so SQLAlchemy registers them in Base.metadata

from orders_api.data.models.user import UserModel
from orders_api.data.models.product import ProductModel
from orders_api.data.models.order import OrderModel
from orders_api.data.models.order_item import OrderItemModel

__all__ = ["UserModel", "ProductModel", "OrderModel", "OrderItemModel"]
