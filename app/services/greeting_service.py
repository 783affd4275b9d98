"""
GREETING SERVICE

Fetches a random visitor first name for the page header.
No business logic. Failure yields an empty name.
"""

import logging

import httpx

from app.config import settings

_logger = logging.getLogger(__name__)


class GreetingService:
    def __init__(self, api_url: str = None, enabled: bool = None, timeout: float = 10.0):
        self.api_url = api_url or settings.GREETING_API_URL
        self.enabled = settings.GREETING_ENABLED if enabled is None else enabled
        self.timeout = timeout

    async def random_name(self) -> str:
        if not self.enabled:
            return ""

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.api_url)
                response.raise_for_status()
                data = response.json()
            return str(data["results"][0]["name"]["first"])
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError):
            _logger.exception("Error fetching user")
            return ""
