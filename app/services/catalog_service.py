from typing import List

from sqlalchemy.orm import Session

from app.data.models.product import CategoryModel, ProductModel
from app.domain.errors import NotFoundError, ValidationFailure
from app.domain.schemas import CategoryIn, ProductIn, ProductUpdate
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Produkty i kategorie."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    # products
    def list_products(self) -> List[ProductModel]:
        return self.repo.list_products()

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, payload: ProductIn) -> ProductModel:
        self._check_category(payload.category_id)
        product = self.repo.add(ProductModel(**payload.model_dump()))
        logger.info(f"Product {product.id} created")
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)
        data = payload.model_dump(exclude_unset=True)

        if "category_id" in data:
            self._check_category(data["category_id"])

        for key, value in data.items():
            if value is None and key != "category_id":
                continue
            setattr(product, key, value)

        return self.repo.save(product)

    def delete_product(self, product_id: int):
        self.repo.delete(self.get_product(product_id))
        logger.info(f"Product {product_id} deleted")

    # categories
    def list_categories(self) -> List[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, category_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        if self.repo.get_category_by_name(payload.name):
            raise ValidationFailure("Category already exists")
        return self.repo.add(CategoryModel(name=payload.name))

    def update_category(self, category_id: int, payload: CategoryIn) -> CategoryModel:
        category = self.get_category(category_id)
        existing = self.repo.get_category_by_name(payload.name)
        if existing and existing.id != category.id:
            raise ValidationFailure("Category already exists")

        category.name = payload.name
        return self.repo.save(category)

    def delete_category(self, category_id: int):
        self.repo.delete(self.get_category(category_id))
        logger.info(f"Category {category_id} deleted")

    def _check_category(self, category_id: int | None):
        if category_id is not None and not self.repo.get_category(category_id):
            raise NotFoundError("Category not found")
