from datetime import datetime
from decimal import Decimal

from storefront.schemas.base import CamelModel


class OrderOut(CamelModel):
    id: int
    user_id: int
    total_amount: Decimal
    created_at: datetime
