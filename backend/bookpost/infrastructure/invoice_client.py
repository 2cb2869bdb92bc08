"""Invoice Gateway Client: creates payment invoices on a Xendit-compatible API.

Invariants:
    - Authenticates with HTTP basic auth (api key as username, empty password)
    - enabled is False when no api key is configured; create_invoice must not be called then
    - Any transport, status, or payload failure raises ExternalServiceError
"""

import logging
from dataclasses import dataclass

import httpx

from bookpost.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "invoice_gateway"


@dataclass(frozen=True)
class Invoice:
    id: str
    invoice_url: str


class InvoiceClient:
    """Async wrapper around POST /v2/invoices."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        currency: str = "IDR",
        duration_seconds: int = 86_400,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.currency = currency
        self.duration_seconds = duration_seconds
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def create_invoice(
        self,
        *,
        external_id: str,
        amount: int,
        description: str,
        customer_name: str,
        customer_email: str,
        items: list[dict],
    ) -> Invoice:
        """Request an invoice and return its id and payment URL."""
        body = {
            "external_id": external_id,
            "amount": amount,
            "description": description,
            "invoice_duration": self.duration_seconds,
            "customer": {"name": customer_name, "email": customer_email},
            "currency": self.currency,
            "items": items,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(
                    self.api_url, json=body, auth=(self.api_key, ""),
                )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Invoice gateway returned {e.response.status_code}: {e.response.text}",
                extra={"service": SERVICE_NAME},
            )
            raise ExternalServiceError("Error while creating invoice", SERVICE_NAME)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                f"Invoice gateway call failed: {e}", extra={"service": SERVICE_NAME},
            )
            raise ExternalServiceError("Error while creating invoice", SERVICE_NAME)

        if not isinstance(payload, dict) or "id" not in payload or "invoice_url" not in payload:
            logger.error(
                f"Invoice gateway returned unexpected payload: {payload!r}",
                extra={"service": SERVICE_NAME},
            )
            raise ExternalServiceError("Error while creating invoice", SERVICE_NAME)
        return Invoice(id=str(payload["id"]), invoice_url=str(payload["invoice_url"]))
