from typing import List, Sequence

from sqlalchemy.orm import Session

from storefront.models.cart_item import CartItem


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int, for_update: bool = False) -> List[CartItem]:
        qry = self.db.query(CartItem).filter(CartItem.user_id == user_id).order_by(CartItem.id)
        if for_update:
            qry = qry.with_for_update()
        return qry.all()

    def add(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        self.db.add(item)
        self.db.flush()
        return item

    def delete_by_ids(self, item_ids: Sequence[int]) -> int:
        """Delete exactly these rows; rows added by others since the read stay put."""
        if not item_ids:
            return 0
        deleted = (
            self.db.query(CartItem)
            .filter(CartItem.id.in_(list(item_ids)))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted
