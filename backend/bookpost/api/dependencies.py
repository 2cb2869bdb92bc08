"""Request Dependencies: bearer-token authentication and outbound clients.

Invariants:
    - Protected routes depend on get_current_user_id; a missing, malformed,
      badly signed, or expired token is a 401 before the route body runs
    - Claims are trusted after signature verification (no DB lookup here)
    - Outbound clients built from Settings so tests can override them via dependency_overrides
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookpost.config import Settings, get_settings
from bookpost.core.credentials import decode_access_token
from bookpost.core.domain_types import UserId
from bookpost.core.errors import UnauthorizedError
from bookpost.infrastructure.invoice_client import InvoiceClient
from bookpost.infrastructure.joke_client import JokeClient

_bearer = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Decoded JWT claims of the caller."""
    if credentials is None:
        raise UnauthorizedError("Missing or malformed bearer token")
    return decode_access_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )


async def get_current_user_id(claims: dict = Depends(get_current_claims)) -> UserId:
    return UserId(claims["user_id"])


def get_joke_client(settings: Settings = Depends(get_settings)) -> JokeClient:
    return JokeClient(
        settings.joke_api_url,
        settings.joke_api_key,
        timeout_seconds=settings.http_timeout_seconds,
    )


def get_invoice_client(settings: Settings = Depends(get_settings)) -> InvoiceClient:
    return InvoiceClient(
        settings.invoice_api_url,
        settings.invoice_api_key,
        currency=settings.invoice_currency,
        duration_seconds=settings.invoice_duration_seconds,
        timeout_seconds=settings.http_timeout_seconds,
    )
