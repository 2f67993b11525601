from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.schemas import CategoryIn, CategoryOut, ProductIn, ProductOut, ProductUpdate
from app.services.catalog_service import CatalogService

products_router = APIRouter(prefix="/products", tags=["products"])
categories_router = APIRouter(prefix="/categories", tags=["categories"])


@products_router.post("/", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return CatalogService(db).create_product(payload)


@products_router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return CatalogService(db).list_products()


@products_router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_product(product_id)


@products_router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    return CatalogService(db).update_product(product_id, payload)


@products_router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    CatalogService(db).delete_product(product_id)
    return Response(status_code=204)


@categories_router.post("/", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    return CatalogService(db).create_category(payload)


@categories_router.get("/", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@categories_router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_category(category_id)


@categories_router.patch("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, payload: CategoryIn, db: Session = Depends(get_db)):
    return CatalogService(db).update_category(category_id, payload)


@categories_router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, db: Session = Depends(get_db)):
    CatalogService(db).delete_category(category_id)
    return Response(status_code=204)
