import json
import logging
from typing import Any, Dict, Optional

import httpx

from chatapi_whatsapp.exceptions import CommunicationError, ServiceError
from chatapi_whatsapp.settings import settings

logger = logging.getLogger(__name__)


class BaseClient:
    """
    Base httpx client for token-authenticated gateways.

    Every request carries the token as a ``token`` query parameter and every error raised by
    httpx is translated into the library's exception hierarchy.

    Args:
        base_url (str): The base URL of the gateway instance.
        token (str): The API token of the gateway instance.
        verify_ssl (bool): Whether to verify SSL certificates.
        timeout (int): The timeout for requests.
        transport (httpx.AsyncBaseTransport): Optional transport, mostly useful for tests.
    """

    def __init__(
        self,
        base_url: Optional[str],
        token: Optional[str],
        verify_ssl: bool = settings.HTTPX_CLIENT_VERIFY_SSL,
        timeout: int = settings.HTTPX_CLIENT_DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.session = httpx.AsyncClient(
            headers=headers,
            verify=verify_ssl,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        self.base_url = base_url.rstrip("/") if base_url else base_url
        self.token = token

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        """Close the underlying HTTP session."""
        await self.session.aclose()

    def _url(self, path: str) -> str:
        if not self.base_url:
            raise CommunicationError("ChatAPI base URL is not configured")
        return f"{self.base_url}{path}"

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Make a request to the API and translate response and transport errors."""
        params = {"token": self.token, **kwargs.pop("params", {})}
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = await self.session.request(method, url, params=params, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = ServiceError.from_http_error(e)
            logger.error("%s %s failed: %s", method, path, error)
            raise error from e
        except httpx.HTTPError as e:
            logger.error("Could not reach ChatAPI on %s %s: %s", method, path, e)
            raise CommunicationError(str(e)) from e
        return response

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Make a request to the API and decode its JSON body."""
        response = await self._send(method, path, **kwargs)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Invalid JSON response on %s %s", method, path)
            raise CommunicationError(f"Invalid JSON response: {e}") from e

    async def get(self, path: str, **kwargs):
        """Make a GET request to the API."""
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, payload: Dict[str, Any], **kwargs):
        """Make a POST request to the API."""
        return await self._request("POST", path, json=payload, **kwargs)
