from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from storefront.db import MAX_ROW_ID, get_db
from storefront.schemas.product_schema import ProductIn, ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["catalogue"])


@router.get("", response_model=List[ProductOut], summary="List products")
def list_products(db: Session = Depends(get_db)):
    return CatalogService(db).list_products()


@router.post("", response_model=ProductOut, summary="Add a product")
def add_product(payload: ProductIn, db: Session = Depends(get_db)):
    return CatalogService(db).add_product(payload.name, payload.price)


@router.get("/{product_id}", response_model=ProductOut, summary="Get product by id")
def get_product(product_id: int = Path(..., ge=1, le=MAX_ROW_ID), db: Session = Depends(get_db)):
    return CatalogService(db).get_product(product_id)
