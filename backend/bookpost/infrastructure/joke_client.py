"""Joke API Client: fetches a random joke used as fallback post content.

Invariants:
    - Sends X-Api-Key header; expects a JSON array whose first element has a "joke" string
    - Any transport, status, or payload failure raises ExternalServiceError("Failed to get joke")
    - No retry: a failed joke fails the post creation
"""

import logging

import httpx

from bookpost.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "joke_api"


class JokeClient:
    """Thin async wrapper around the api-ninjas jokes endpoint."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def random_joke(self) -> str:
        """Return one joke string."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.get(
                    self.api_url, headers={"X-Api-Key": self.api_key},
                )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Joke API returned {e.response.status_code}: {e.response.text}",
                extra={"service": SERVICE_NAME},
            )
            raise ExternalServiceError("Failed to get joke", SERVICE_NAME)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Joke API call failed: {e}", extra={"service": SERVICE_NAME})
            raise ExternalServiceError("Failed to get joke", SERVICE_NAME)

        return _extract_joke(payload)


def _extract_joke(payload: object) -> str:
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        joke = payload[0].get("joke")
        if isinstance(joke, str) and joke.strip():
            return joke
    logger.error(
        f"Joke API returned unexpected payload: {payload!r}",
        extra={"service": SERVICE_NAME},
    )
    raise ExternalServiceError("Failed to get joke", SERVICE_NAME)
