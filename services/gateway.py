"""
Payment gateway client.

Creates payment intents through a Stripe-compatible REST API. The client
secret it returns is handed to the browser, which completes the charge
directly with the gateway; nothing is persisted here.
"""

import httpx
from typing import Optional
from core.config import Settings
from core.exceptions import PaymentGatewayError
import logging

logger = logging.getLogger(__name__)


class PaymentGateway:
    """
    Thin async client for the payment intents endpoint.

    Attributes:
        base_url: Gateway API root (e.g. https://api.stripe.com)
        secret_key: Server-side secret key, sent as a bearer token
        currency: ISO currency code for every intent
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        secret_key: Optional[str],
        currency: str = "usd",
        timeout: float = 15.0
    ):
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self.currency = currency
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PaymentGateway":
        return cls(
            base_url=settings.PAYMENT_GATEWAY_URL,
            secret_key=settings.PAYMENT_SECRET_KEY,
            currency=settings.PAYMENT_CURRENCY,
            timeout=settings.HTTP_TIMEOUT
        )

    @property
    def intents_url(self) -> str:
        return f"{self.base_url}/v1/payment_intents"

    async def create_payment_intent(self, amount: int) -> str:
        """
        Create a payment intent.

        Args:
            amount: Amount in the smallest currency unit

        Returns:
            The intent's client secret

        Raises:
            PaymentGatewayError: Gateway not configured, unreachable, or refused
        """
        if not self.secret_key:
            raise PaymentGatewayError(
                "Payment gateway is not configured",
                context={"gateway_url": self.intents_url}
            )

        headers = {"Authorization": f"Bearer {self.secret_key}"}
        form = {
            "amount": str(amount),
            "currency": self.currency,
            "payment_method_types[]": "card",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.intents_url, headers=headers, data=form)
        except httpx.HTTPError as e:
            raise PaymentGatewayError(
                "Payment gateway unreachable",
                context={"gateway_url": self.intents_url},
                original_exception=e
            )

        if response.status_code >= 400:
            try:
                gateway_message = response.json().get("error", {}).get("message")
            except ValueError:
                gateway_message = response.text[:500]
            raise PaymentGatewayError(
                "Payment gateway rejected the payment intent",
                context={
                    "gateway_url": self.intents_url,
                    "status_code": response.status_code,
                    "detail": gateway_message
                }
            )

        client_secret = response.json().get("client_secret")
        if not client_secret:
            raise PaymentGatewayError(
                "Payment gateway returned no client secret",
                context={"gateway_url": self.intents_url, "status_code": response.status_code}
            )

        logger.info(f"Created payment intent for {amount} {self.currency}")
        return client_secret
