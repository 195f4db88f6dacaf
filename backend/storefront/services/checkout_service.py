import os
from decimal import Decimal
from typing import Iterable, Mapping

from filelock import FileLock, Timeout
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.exceptions import ProductNotFound, TransactionFailure
from storefront.models.cart_item import CartItem
from storefront.models.order import Order
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.logging import get_logger
from storefront.utils.retry import transaction_retry
from storefront.utils.transactions import smart_transaction
from storefront.utils.validation import check_row_id

log = get_logger(__name__)

CENT = Decimal("0.01")


def price_cart(items: Iterable[CartItem], prices: Mapping[int, Decimal]) -> Decimal:
    """
    Sum quantity * price over the cart using Decimal arithmetic.
    Raises ProductNotFound for the first item whose product has no price.
    """
    total = Decimal("0")
    for it in items:
        price = prices.get(it.product_id)
        if price is None:
            raise ProductNotFound(it.product_id)
        total += price * it.quantity
    return total.quantize(CENT)


class CheckoutService:
    """
    Turns a user's cart into an Order.

    The read of the cart, the pricing against the catalog, the order insert and
    the cart delete form one transaction: a failure at any step leaves neither
    an order nor a shortened cart behind.
    """

    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)
        self.order_repo = OrderRepository(db)

    def _lock_for(self, user_id: int) -> FileLock:
        os.makedirs(settings.LOCK_DIR, exist_ok=True)
        return FileLock(os.path.join(settings.LOCK_DIR, f"checkout_{user_id}.lock"))

    def checkout(self, user_id: int) -> Order:
        check_row_id(user_id, "userId")
        lock = self._lock_for(user_id)
        try:
            with lock.acquire(timeout=settings.CHECKOUT_LOCK_TIMEOUT_SECONDS):
                order, item_count = self._checkout_once(user_id)
        except Timeout:
            raise TransactionFailure("Could not acquire checkout lock; try again")
        log.info(
            "Checkout user_id=%s order_id=%s items=%s total=%s",
            user_id, order.id, item_count, order.total_amount,
        )
        return order

    @transaction_retry()
    def _checkout_once(self, user_id: int):
        with smart_transaction(self.db):
            items = self.cart_repo.list_for_user(user_id, for_update=True)
            prices = self.product_repo.prices_for(
                {it.product_id for it in items}, lock=True
            )
            total = price_cart(items, prices)
            order = self.order_repo.create(user_id, total)
            self.cart_repo.delete_by_ids([it.id for it in items])
        return order, len(items)
