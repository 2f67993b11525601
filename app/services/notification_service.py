# app/services/notification_service.py
from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    def send_payment_confirmation(self, user_id: int | None, order_id: int):
        send_payment_confirmation_task.delay(user_id, order_id)


def get_notification_service() -> NotificationService:
    return NotificationService()


@celery_app.task(name="app.services.notification_service.send_payment_confirmation_task")
def send_payment_confirmation_task(user_id: int | None, order_id: int):
    """
    Celery task - w prawdziwym systemie wysłałby email do kupujacego.
    Teraz tylko loguje.
    """
    recipient = f"User {user_id}" if user_id is not None else "Guest"
    logger.info(f"[NOTIFICATION] {recipient}: payment for order {order_id} received")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
