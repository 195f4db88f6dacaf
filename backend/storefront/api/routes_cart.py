from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from storefront.db import MAX_ROW_ID, get_db
from storefront.schemas.cart_schema import CartItemIn, CartItemOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.post("", response_model=CartItemOut, summary="Add item to cart")
def add_item(payload: CartItemIn, db: Session = Depends(get_db)):
    return CartService(db).add_item(payload.user_id, payload.product_id, payload.quantity)


@router.get("/{user_id}", response_model=List[CartItemOut], summary="Get a user's cart")
def get_cart(user_id: int = Path(..., ge=1, le=MAX_ROW_ID), db: Session = Depends(get_db)):
    return CartService(db).list_items(user_id)
