# orders_api/repos/user_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from orders_api.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def customer_exists(self, customer_id: int) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == customer_id)
        return self.db.execute(stmt).scalar_one_or_none() is not None
