from decimal import Decimal

from storefront.schemas.base import CamelModel


class ProductIn(CamelModel):
    name: str
    price: Decimal


class ProductOut(CamelModel):
    id: int
    name: str
    price: Decimal
