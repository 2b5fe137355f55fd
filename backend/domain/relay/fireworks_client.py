"""
Async Fireworks AI chat completion client (JSON and event-stream responses)
"""

import json
import logging
from typing import Dict, Any, Optional, AsyncIterator
import httpx

from core.config import settings
from core.exceptions import UpstreamAPIError

logger = logging.getLogger(__name__)


def extract_error_message(status_code: int, body: str) -> str:
    """
    Pull a human-readable message out of an upstream error body.

    Prefers {"error": {"message": ...}}, then a string "error"/"message"
    field, then the raw body text.
    """
    fallback = f"Fireworks API error ({status_code})"
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return body or fallback

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if isinstance(data.get("message"), str) and data["message"]:
            return data["message"]
    return body or fallback


class FireworksClient:
    """Async client for the Fireworks chat completions endpoint"""

    def __init__(
        self,
        api_url: str = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = api_url or settings.fireworks_api_url
        self.timeout = timeout or settings.fireworks_timeout

        # Connection pool (created lazily unless injected)
        self._client: Optional[httpx.AsyncClient] = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _headers(self, api_key: str, stream: bool) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        if stream:
            headers["Accept"] = "text/event-stream"
        return headers

    async def _raise_for_upstream_error(self, response: httpx.Response) -> None:
        """Raise UpstreamAPIError carrying the upstream status when the call failed."""
        if response.is_success:
            return
        await response.aread()
        body = response.text
        logger.error(f"Fireworks API error ({response.status_code}): {body}")
        await response.aclose()
        raise UpstreamAPIError(
            extract_error_message(response.status_code, body),
            status_code=response.status_code,
        )

    async def complete(self, payload: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        """
        Non-streaming completion.

        Returns:
            Provider completion JSON, unmodified

        Raises:
            UpstreamAPIError: If the provider returns a non-2xx status
        """
        client = await self._get_client()
        response = await client.post(
            self.api_url,
            json=payload,
            headers=self._headers(api_key, stream=False),
        )
        await self._raise_for_upstream_error(response)
        return response.json()

    async def open_stream(self, payload: Dict[str, Any], api_key: str) -> httpx.Response:
        """
        Send a streaming completion request and return the open response.

        The status is checked before any body is read, so upstream errors are
        still reported as JSON. The caller owns the returned response and must
        consume it with iter_stream().
        """
        client = await self._get_client()
        request = client.build_request(
            "POST",
            self.api_url,
            json=payload,
            headers=self._headers(api_key, stream=True),
        )
        response = await client.send(request, stream=True)
        await self._raise_for_upstream_error(response)
        return response

    async def iter_stream(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield upstream body chunks in arrival order, closing the response at the end."""
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            # Headers already sent, so end the stream
            logger.error(f"Upstream stream interrupted: {e}")
        finally:
            await response.aclose()

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
