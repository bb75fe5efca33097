# farmconnect/api/routers/products.py
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from farmconnect.api.deps import rate_limit, require
from farmconnect.data.database import get_db
from farmconnect.data.models.user import UserModel
from farmconnect.domain.permissions import Action
from farmconnect.domain.schemas import CategoryOut, MessageOut, ProductIn, ProductOut, ProductPage, ProductUpdate
from farmconnect.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"], dependencies=[Depends(rate_limit)])


# public catalogue
@router.get("", response_model=ProductPage)
def search_products(
    q: str | None = Query(None, max_length=100),
    category: str | None = None,
    organic: bool | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return ProductService(db).search(
        q=q,
        category=category,
        organic=organic,
        min_price=min_price,
        max_price=max_price,
        limit=limit,
        offset=offset,
    )


@router.get("/categories", response_model=List[CategoryOut])
def get_categories(db: Session = Depends(get_db)):
    return ProductService(db).categories()


# farmer listings, static paths before /{product_id}
@router.get("/farmer/my-listings", response_model=List[ProductOut])
def my_listings(
    farmer: UserModel = Depends(require(Action.manage_listings)),
    db: Session = Depends(get_db),
):
    return ProductService(db).list_for_farmer(farmer.id)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ProductService(db).get_product(product_id)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    farmer: UserModel = Depends(require(Action.manage_listings)),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(farmer.id, payload)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    farmer: UserModel = Depends(require(Action.manage_listings)),
    db: Session = Depends(get_db),
):
    return ProductService(db).update_product(farmer.id, product_id, payload)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: int,
    farmer: UserModel = Depends(require(Action.manage_listings)),
    db: Session = Depends(get_db),
):
    ProductService(db).delete_product(farmer.id, product_id)
    return {"message": "Product removed from sale"}
