from typing import Iterable, List, Set

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.data.models.product import CategoryModel, ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    # products
    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .order_by(ProductModel.id)
                .options(selectinload(ProductModel.category))
            ).scalars()
        )

    def existing_ids(self, product_ids: Iterable[int]) -> Set[int]:
        product_ids = list(product_ids)
        if not product_ids:
            return set()
        return set(
            self.db.execute(
                select(ProductModel.id).where(ProductModel.id.in_(product_ids))
            ).scalars()
        )

    # categories
    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_category_by_name(self, name: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.name == name)
        ).scalar_one_or_none()

    def list_categories(self) -> List[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars())

    def add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def save(self, obj):
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj):
        self.db.delete(obj)
        self.db.commit()
