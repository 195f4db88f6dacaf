from decimal import Decimal, InvalidOperation
from typing import List

from sqlalchemy.orm import Session

from storefront.exceptions import ProductNotFound, ValidationError
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.utils.logging import get_logger
from storefront.utils.transactions import smart_transaction
from storefront.utils.validation import check_row_id

log = get_logger(__name__)

CENT = Decimal("0.01")
MAX_NAME_LENGTH = 256
# Numeric(12, 2) leaves ten digits before the point
MAX_PRICE = Decimal("9999999999.99")


def normalize_price(value) -> Decimal:
    """Coerce value to a cent-exact, non-negative Decimal or raise ValidationError."""
    if isinstance(value, float):
        value = repr(value)
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid price: {value!r}")
    if not price.is_finite():
        raise ValidationError("Price must be a finite number")
    if price < 0:
        raise ValidationError("Price must not be negative")
    if price > MAX_PRICE:
        raise ValidationError(f"Price must not exceed {MAX_PRICE}")
    if price != price.quantize(CENT):
        raise ValidationError("Price must have at most two decimal places")
    return price.quantize(CENT)


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.product_repo = ProductRepository(db)

    def add_product(self, name: str, price) -> Product:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Product name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Product name must be at most {MAX_NAME_LENGTH} characters")
        price = normalize_price(price)

        with smart_transaction(self.db):
            product = self.product_repo.create(name, price)
        log.info("Created product id=%s name=%r price=%s", product.id, product.name, price)
        return product

    def list_products(self) -> List[Product]:
        return self.product_repo.list()

    def get_product(self, product_id: int) -> Product:
        check_row_id(product_id, "productId")
        product = self.product_repo.get(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product
