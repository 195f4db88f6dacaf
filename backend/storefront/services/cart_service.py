from typing import List

from sqlalchemy.orm import Session

from storefront.exceptions import ValidationError
from storefront.models.cart_item import CartItem
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.user_repo import UserRepository
from storefront.utils.logging import get_logger
from storefront.utils.transactions import smart_transaction
from storefront.utils.validation import check_row_id, is_int

log = get_logger(__name__)

MAX_QUANTITY = 10_000


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)
        self.user_repo = UserRepository(db)

    def add_item(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        """
        Insert a new cart row. Rows for the same product are not merged;
        checkout sums them all.
        """
        check_row_id(user_id, "userId")
        check_row_id(product_id, "productId")
        if not is_int(quantity) or not 1 <= quantity <= MAX_QUANTITY:
            raise ValidationError(f"Quantity must be an integer between 1 and {MAX_QUANTITY}")

        with smart_transaction(self.db):
            if not self.user_repo.get(user_id):
                raise ValidationError(f"Unknown user: {user_id}")
            if not self.product_repo.get(product_id):
                raise ValidationError(f"Unknown product: {product_id}")
            item = self.cart_repo.add(user_id, product_id, quantity)
        log.info(
            "Cart add user_id=%s product_id=%s qty=%s item_id=%s",
            user_id, product_id, quantity, item.id,
        )
        return item

    def list_items(self, user_id: int) -> List[CartItem]:
        check_row_id(user_id, "userId")
        return self.cart_repo.list_for_user(user_id)
