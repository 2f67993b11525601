# app/services/payment_service.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.address import ShippingAddressModel
from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_item import OrderItemModel
from app.domain.errors import NotFoundError, PersistenceFailure
from app.domain.schemas import PaymentIntentCreate
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.services.notification_service import NotificationService
from app.services.payment_gateway import PaymentGateway
from app.utils.settings import PAYMENT_CURRENCY
from app.utils.logging import get_logger

logger = get_logger(__name__)

CENTS = Decimal("100")


@dataclass
class PaymentOutcome:
    order: OrderModel
    #False gdy zamowienie bylo juz oplacone (powtorzony webhook)
    transitioned: bool


def to_cents(amount: Decimal) -> int:
    return int((amount * CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """
    Platnosci i przejscia statusu zamowienia.

    Tylko paymentInitiated -> paymentSucceeded jest sterowane tutaj,
    shipped/delivered to operacje administracyjne.
    """

    def __init__(self, db: Session, gateway: PaymentGateway, notifier: NotificationService):
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)
        self.users = UserRepo(db)
        self.products = ProductRepo(db)
        self.gateway = gateway
        self.notifier = notifier

    def create_payment_intent(self, payload: PaymentIntentCreate) -> Dict[str, Any]:
        """
        Tworzy PaymentIntent u dostawcy i zamowienie w statusie paymentInitiated.
        Zwraca client secret, ktorym frontend potwierdza platnosc.
        """
        details = payload.order_details

        if details.user_id is not None and not self.users.get_user(details.user_id):
            raise NotFoundError("User not found")

        product_ids = {i.product_id for i in payload.items}
        missing = product_ids - self.products.existing_ids(product_ids)
        if missing:
            raise NotFoundError(f"Product {min(missing)} not found")

        intent = self.gateway.create_payment_intent(
            amount=to_cents(details.total_price),
            currency=PAYMENT_CURRENCY,
            idempotency_key=str(uuid4()),
        )
        logger.info(f"PaymentIntent {intent.id} created for user {details.user_id}")

        order = OrderModel(
            user_id=details.user_id,
            stripe_payment_intent_id=intent.id,
            status=OrderStatus.PAYMENT_INITIATED.value,
            total_price=details.total_price,
            items=[
                OrderItemModel(product_id=i.product_id, quantity=i.product_quantity)
                for i in payload.items
            ],
            shipping_address=ShippingAddressModel(**payload.shipping_address.model_dump()),
        )

        try:
            self.orders.add_order(order)
            self.orders.commit()
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.error(f"Failed to store order for PaymentIntent {intent.id}: {e}", exc_info=True)
            raise PersistenceFailure("Order could not be created") from e

        logger.info(f"Order {order.id} created, status {order.status}")
        return {"client_secret": intent.client_secret}

    def mark_payment_succeeded(self, payment_intent_id: str) -> PaymentOutcome:
        """
        Obsluga payment_intent.succeeded.

        1. warunkowy update statusu po payment intent id (tylko z paymentInitiated)
        2. brak zamowienia -> NotFoundError
        3. przy faktycznym przejsciu usuwa zakupione produkty z koszyka wlasciciela
        Powtorzone wywolanie nic nie zmienia i nie rzuca bledu.
        """
        try:
            rowcount = self.orders.transition_status(
                payment_intent_id,
                from_status=OrderStatus.PAYMENT_INITIATED.value,
                to_status=OrderStatus.PAYMENT_SUCCEEDED.value,
            )
            order = self.orders.get_by_payment_intent(payment_intent_id)

            if order is None:
                self.orders.rollback()
                logger.warning(f"Order not found for payment intent {payment_intent_id}")
                raise NotFoundError("Order not found")

            transitioned = rowcount > 0
            if not transitioned:
                self.orders.rollback()
                logger.info(
                    f"Order {order.id} already in status {order.status}, "
                    f"ignoring repeated payment for {payment_intent_id}"
                )
                return PaymentOutcome(order=order, transitioned=False)

            removed = self._remove_purchased_items(order)
            self.orders.commit()
        except SQLAlchemyError as e:
            self.orders.rollback()
            logger.error(f"Failed to mark payment {payment_intent_id} as succeeded: {e}", exc_info=True)
            raise PersistenceFailure("Order update failed") from e

        logger.info(
            f"Order {order.id} marked {OrderStatus.PAYMENT_SUCCEEDED.value}, "
            f"{removed} cart items removed"
        )
        #zmiana statusu jest juz zapisana, blad brokera nie moze cofnac potwierdzenia webhooka
        try:
            self.notifier.send_payment_confirmation(order.user_id, order.id)
        except Exception:
            logger.exception(f"Failed to dispatch payment confirmation for order {order.id}")

        return PaymentOutcome(order=order, transitioned=True)

    def _remove_purchased_items(self, order: OrderModel) -> int:
        #zamowienie goscia albo user bez koszyka - nic do sprzatania
        if order.user_id is None:
            return 0

        cart = self.carts.get_cart_by_user(order.user_id)
        if cart is None:
            return 0

        #pelne usuniecie, niezaleznie od ilosci w koszyku
        return self.carts.delete_items(cart.id, {item.product_id for item in order.items})
