from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from storefront.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def list(self) -> List[Product]:
        return self.db.query(Product).order_by(Product.id).all()

    def create(self, name: str, price: Decimal) -> Product:
        p = Product(name=name, price=price)
        self.db.add(p)
        self.db.flush()
        return p

    def prices_for(self, product_ids: Iterable[int], lock: bool = False) -> Dict[int, Decimal]:
        """
        Return {product_id: price} for the ids that exist. With lock=True the rows
        are read FOR SHARE so their price cannot change until the caller commits
        (ignored by backends without row locks, e.g. SQLite).
        """
        ids = set(product_ids)
        if not ids:
            return {}
        qry = self.db.query(Product.id, Product.price).filter(Product.id.in_(ids))
        if lock:
            qry = qry.with_for_update(read=True)
        return {pid: Decimal(price) for pid, price in qry.all()}
