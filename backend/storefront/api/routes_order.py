from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.db import MAX_ROW_ID, get_db
from storefront.schemas.order_schema import OrderOut
from storefront.services.checkout_service import CheckoutService

router = APIRouter(tags=["orders"])


@router.post("", response_model=OrderOut, summary="Check out a user's cart")
def create_order(
    user_id: int = Query(..., alias="userId", ge=1, le=MAX_ROW_ID),
    db: Session = Depends(get_db),
):
    return CheckoutService(db).checkout(user_id)
