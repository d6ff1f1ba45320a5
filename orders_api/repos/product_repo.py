from sqlalchemy.orm import Session
from orders_api.data.models.product import ProductModel

class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)
