from pydantic import Field

from storefront.db import MAX_ROW_ID
from storefront.schemas.base import CamelModel


class CartItemIn(CamelModel):
    user_id: int = Field(..., ge=1, le=MAX_ROW_ID)
    product_id: int = Field(..., ge=1, le=MAX_ROW_ID)
    quantity: int


class CartItemOut(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
