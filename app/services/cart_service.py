from typing import Dict, Any, Iterable, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import NotFoundError, ValidationFailure, PersistenceFailure
from app.domain.reconcile import CartChanges, reconcile
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka usera.
    query (get) tylko odczyt, commands (add, sync, remove, clear) modyfikuja stan
    i koncza sie jednym commitem albo rollbackiem.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def _get_user_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if cart:
            return cart

        if not self.users.get_user(user_id):
            raise NotFoundError("User not found")
        raise NotFoundError("No cart found")

    def _cart_to_dict(self, cart: CartModel) -> Dict[str, Any]:
        items = self.repo.get_cart_items(cart.id)
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {"product_id": i.product_id, "product_quantity": i.quantity}
                for i in items
            ],
        }

    #query
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._get_user_cart(user_id)
        return self._cart_to_dict(cart)

    #commands
    def add_item(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationFailure("Quantity must be greater than 0")

        cart = self._get_user_cart(user_id)

        if not self.products.get_product(product_id):
            raise NotFoundError(f"Product {product_id} not found")

        if self.repo.get_cart_item(cart.id, product_id):
            raise ValidationFailure(f"Product {product_id} is already in the cart")

        logger.info(f"Adding product {product_id} x{quantity} to cart {cart.id}")
        self.repo.add_cart_item(
            CartItemModel(cart_id=cart.id, product_id=product_id, quantity=quantity)
        )
        self._commit(f"add product {product_id} to cart {cart.id}")

        return self._cart_to_dict(cart)

    def sync_cart(self, user_id: int, desired_items: Iterable[Tuple[int, int]]) -> CartChanges:
        """
        Uzgadnia koszyk z lista od klienta (create/update/delete).

        Wszystkie trzy paczki zmian ida w jednej transakcji - blad w ktorejkolwiek
        cofa calosc. Produkty spoza listy zostaja nietkniete.
        """
        cart = self._get_user_cart(user_id)
        current = {i.product_id: i.quantity for i in self.repo.get_cart_items(cart.id)}

        changes = reconcile(desired_items, current)
        if changes.is_empty():
            logger.info(f"Cart {cart.id} already up to date")
            return changes

        new_ids = {product_id for product_id, _ in changes.creates}
        missing = new_ids - self.products.existing_ids(new_ids)
        if missing:
            raise NotFoundError(f"Product {min(missing)} not found")

        logger.info(
            f"Syncing cart {cart.id}: {len(changes.creates)} creates, "
            f"{len(changes.updates)} updates, {len(changes.deletes)} deletes"
        )

        try:
            for product_id, quantity in changes.updates:
                self.repo.set_item_quantity(cart.id, product_id, quantity)
            self.repo.delete_items(cart.id, changes.deletes)
            self.repo.add_cart_items(cart.id, changes.creates)
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Cart {cart.id} sync failed: {e}", exc_info=True)
            raise PersistenceFailure("Cart update failed") from e

        self._commit(f"sync cart {cart.id}")
        return changes

    def remove_item(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart = self._get_user_cart(user_id)

        if not self.repo.get_cart_item(cart.id, product_id):
            raise NotFoundError(f"Product {product_id} is not in the cart")

        logger.info(f"Removing product {product_id} from cart {cart.id}")
        self.repo.delete_items(cart.id, [product_id])
        self._commit(f"remove product {product_id} from cart {cart.id}")

        return self._cart_to_dict(cart)

    def clear_cart(self, user_id: int) -> int:
        cart = self._get_user_cart(user_id)

        removed = self.repo.clear(cart.id)
        self._commit(f"clear cart {cart.id}")

        logger.info(f"Cart {cart.id} cleared, {removed} items removed")
        return removed

    def _commit(self, action: str):
        try:
            self.repo.commit()
        except IntegrityError as e:
            self.repo.rollback()
            logger.warning(f"Integrity error on {action}: {e.orig}")
            raise ValidationFailure("Cart was modified concurrently, retry the request") from e
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Failed to {action}: {e}", exc_info=True)
            raise PersistenceFailure("Cart update failed") from e
