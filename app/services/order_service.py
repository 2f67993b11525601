# app/services/order_service.py
from typing import Dict, Any, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.errors import NotFoundError, PersistenceFailure
from app.repos.order_repo import OrderRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


def order_items_to_dicts(order: OrderModel) -> List[Dict[str, Any]]:
    return [
        {"product_id": i.product_id, "product_quantity": i.quantity}
        for i in order.items
    ]


def address_to_dict(address) -> Dict[str, Any] | None:
    if address is None:
        return None
    return {
        "id": address.id,
        "full_name": address.full_name,
        "line1": address.line1,
        "line2": address.line2,
        "city": address.city,
        "province": address.province,
        "postal_code": address.postal_code,
        "country": address.country,
    }


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "stripe_payment_intent_id": order.stripe_payment_intent_id,
        "status": order.status,
        "total_price": order.total_price,
        "created_at": order.created_at,
        "items": order_items_to_dicts(order),
        "shipping_address": address_to_dict(order.shipping_address),
    }


class OrderService:
    """
    Odczyt i usuwanie zamowien. Tworzenie zamowienia idzie przez PaymentService,
    razem z PaymentIntentem.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    def _get(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def list_orders(self) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_orders()]

    def get_order(self, order_id: int) -> Dict[str, Any]:
        return order_to_dict(self._get(order_id))

    def get_order_items(self, order_id: int) -> List[Dict[str, Any]]:
        return order_items_to_dicts(self._get(order_id))

    def delete_order(self, order_id: int):
        order = self._get(order_id)

        try:
            self.repo.delete_order(order)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Failed to delete order {order_id}: {e}", exc_info=True)
            raise PersistenceFailure("Order could not be deleted") from e

        logger.info(f"Order {order_id} deleted")
