# app/api/routers/payments.py
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.data.database import get_db
from app.domain.errors import NotFoundError, WebhookSignatureError
from app.domain.schemas import PaymentIntentCreate, PaymentIntentOut, WebhookAck
from app.services.notification_service import NotificationService, get_notification_service
from app.services.payment_gateway import PaymentGateway, get_payment_gateway
from app.services.payment_service import PaymentService
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

PAYMENT_SUCCEEDED_EVENT = "payment_intent.succeeded"


def get_service(
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    notifier: NotificationService = Depends(get_notification_service),
) -> PaymentService:
    return PaymentService(db, gateway, notifier)


@router.post("/create-payment-intent", response_model=PaymentIntentOut, status_code=201)
def create_payment_intent(payload: PaymentIntentCreate, svc: PaymentService = Depends(get_service)):
    return svc.create_payment_intent(payload)


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(default=""),
    svc: PaymentService = Depends(get_service),
):
    """
    Webhook dostawcy platnosci. Podpis liczony z surowego body, wiec body
    czytamy bez parsowania.
    """
    payload = await request.body()

    try:
        event = await run_in_threadpool(svc.gateway.construct_event, payload, stripe_signature)
    except WebhookSignatureError as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return PlainTextResponse(f"Webhook Error: {e}", status_code=400)

    if event.type == PAYMENT_SUCCEEDED_EVENT:
        logger.info(
            f"Payment succeeded for intent {event.object_id}: "
            f"{event.amount} {event.currency} (event {event.id})"
        )
        try:
            await run_in_threadpool(svc.mark_payment_succeeded, event.object_id)
        except NotFoundError as e:
            logger.warning(f"Order not found for payment intent: {event.object_id}")
            return JSONResponse({"error": e.message}, status_code=404)
    else:
        logger.info(f"Unhandled event type: {event.type}")

    return WebhookAck(received=True)
