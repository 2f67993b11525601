# app/repos/cart_repo.py
from typing import Iterable, List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel


class CartRepo:
    """Dostep do koszykow. Commit/rollback zostawiony serwisom."""

    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_cart_items(self, cart_id: int) -> List[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def add_cart_items(self, cart_id: int, items: Iterable[tuple[int, int]]) -> int:
        models = [
            CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
            for product_id, quantity in items
        ]
        self.db.add_all(models)
        return len(models)

    def set_item_quantity(self, cart_id: int, product_id: int, quantity: int) -> int:
        #update po kluczu (cart_id, product_id)
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_items(self, cart_id: int, product_ids: Iterable[int]) -> int:
        """deleteMany - brak pasujacych wierszy to nie blad, zwraca 0."""
        product_ids = list(product_ids)
        if not product_ids:
            return 0

        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id.in_(product_ids),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
