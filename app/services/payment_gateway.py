# app/services/payment_gateway.py
"""
Port do dostawcy platnosci.

StripeGateway - produkcja (stripe-python), FakeGateway - dev i testy,
bez zadnych wywolan sieciowych. Podpis webhooka w FakeGateway to
HMAC-SHA256 surowego body kluczem webhook_secret.
"""
import hashlib
import hmac
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

import stripe

from app.domain.errors import WebhookSignatureError
from app.utils.retry import stripe_retry
from app.utils.settings import (
    PAYMENT_GATEWAY,
    STRIPE_SECRET_KEY,
    STRIPE_WEBHOOK_SECRET,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaymentIntentResult:
    id: str
    client_secret: str


@dataclass(frozen=True)
class WebhookEvent:
    """Zweryfikowane zdarzenie od dostawcy, object_* dotyczy data.object."""

    id: str
    type: str
    object_id: str | None = None
    amount: int | None = None
    currency: str | None = None


class PaymentGateway(ABC):
    @abstractmethod
    def create_payment_intent(self, amount: int, currency: str, idempotency_key: str) -> PaymentIntentResult:
        """Tworzy PaymentIntent, amount w centach."""
        ...

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """Weryfikuje podpis i zwraca zdarzenie, WebhookSignatureError przy bledzie."""
        ...


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str, webhook_secret: str):
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    @stripe_retry()
    def create_payment_intent(self, amount: int, currency: str, idempotency_key: str) -> PaymentIntentResult:
        logger.info(f"Stripe create PaymentIntent amount={amount} {currency}")
        intent = stripe.PaymentIntent.create(
            api_key=self.api_key,
            amount=amount,
            currency=currency,
            automatic_payment_methods={"enabled": True},
            idempotency_key=idempotency_key,
        )
        return PaymentIntentResult(id=intent.id, client_secret=intent.client_secret)

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except ValueError as e:
            raise WebhookSignatureError(f"Invalid payload: {e}") from e
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError(str(e)) from e

        obj = event.data.object
        return WebhookEvent(
            id=event.id,
            type=event.type,
            object_id=getattr(obj, "id", None),
            amount=getattr(obj, "amount", None),
            currency=getattr(obj, "currency", None),
        )


class FakeGateway(PaymentGateway):
    def __init__(self, webhook_secret: str = "whsec_test"):
        self.webhook_secret = webhook_secret
        self.intents: list[dict] = []

    def sign(self, payload: bytes) -> str:
        return hmac.new(self.webhook_secret.encode(), payload, hashlib.sha256).hexdigest()

    def create_payment_intent(self, amount: int, currency: str, idempotency_key: str) -> PaymentIntentResult:
        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        self.intents.append(
            {"id": intent_id, "amount": amount, "currency": currency, "idempotency_key": idempotency_key}
        )
        return PaymentIntentResult(id=intent_id, client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}")

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        if not hmac.compare_digest(self.sign(payload), signature or ""):
            raise WebhookSignatureError("No signatures found matching the expected signature for payload")

        try:
            data = json.loads(payload)
            obj = data.get("data", {}).get("object", {})
            return WebhookEvent(
                id=data["id"],
                type=data["type"],
                object_id=obj.get("id"),
                amount=obj.get("amount"),
                currency=obj.get("currency"),
            )
        except (ValueError, KeyError, AttributeError) as e:
            raise WebhookSignatureError(f"Invalid payload: {e}") from e


def get_payment_gateway() -> PaymentGateway:
    """Dependency FastAPI, w testach podmieniana przez dependency_overrides."""
    if PAYMENT_GATEWAY == "fake":
        return FakeGateway(STRIPE_WEBHOOK_SECRET or "whsec_test")
    return StripeGateway(STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET)
