from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.models.order import Order


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int, total_amount: Decimal) -> Order:
        o = Order(user_id=user_id, total_amount=total_amount)
        self.db.add(o)
        self.db.flush()
        return o

    def count_for_user(self, user_id: int) -> int:
        return self.db.query(Order).filter(Order.user_id == user_id).count()
