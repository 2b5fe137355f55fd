"""
MCP client for the tool server
Sends single tools/call requests over HTTP (no session handshake)
"""

import logging
import uuid
from typing import Optional, Dict, Any
import httpx
from httpx_sse import EventSource
from mcp.types import (
    CallToolRequestParams,
    CallToolResult,
    JSONRPCError,
    JSONRPCMessage,
    JSONRPCRequest,
    JSONRPCResponse,
)
from pydantic import ValidationError

from core.exceptions import ToolExecutionError
from core.config import settings

logger = logging.getLogger(__name__)


class MCPClient:
    """
    Client for an MCP streamable-HTTP tool server.
    Only tools/call is used; the server is treated as stateless.
    """

    def __init__(
        self,
        server_url: str = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.server_url = server_url or settings.tool_server_url
        self.timeout = timeout or settings.tool_server_timeout
        self._client: Optional[httpx.AsyncClient] = client
        self.logger = logger

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def is_configured(self) -> bool:
        """Check if a tool server URL is set."""
        return bool(self.server_url)

    def _build_request(self, tool_name: str, tool_args: Dict[str, Any]) -> Dict[str, Any]:
        params = CallToolRequestParams(name=tool_name, arguments=tool_args)
        request = JSONRPCRequest(
            jsonrpc="2.0",
            id=uuid.uuid4().hex,
            method="tools/call",
            params=params.model_dump(by_alias=True, mode="json", exclude_none=True),
        )
        return request.model_dump(by_alias=True, mode="json", exclude_none=True)

    async def call_tool(self, tool_name: str, tool_args: Dict[str, Any]) -> CallToolResult:
        """
        Call a tool and return its result.

        Raises:
            ToolExecutionError: On transport failure, non-2xx status, a JSON-RPC
                error, or a result flagged isError
        """
        if not self.is_configured():
            raise ToolExecutionError("Tool server URL not configured")

        client = await self._get_client()
        try:
            async with client.stream(
                "POST",
                self.server_url,
                json=self._build_request(tool_name, tool_args),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json, text/event-stream",
                },
            ) as response:
                if not response.is_success:
                    await response.aread()
                    self.logger.error(
                        f"Tool server error ({response.status_code}) for {tool_name}: {response.text}"
                    )
                    raise ToolExecutionError(f"Tool server error ({response.status_code})")
                message = await self._read_message(response)
        except httpx.HTTPError as e:
            self.logger.error(f"Error calling tool {tool_name}: {e}")
            raise ToolExecutionError(f"Tool server request failed: {e}")

        if isinstance(message, JSONRPCError):
            raise ToolExecutionError(f"Tool {tool_name} failed: {message.error.message}")
        if not isinstance(message, JSONRPCResponse):
            raise ToolExecutionError(f"Tool {tool_name} returned no result")

        try:
            result = CallToolResult.model_validate(message.result)
        except ValidationError as e:
            raise ToolExecutionError(f"Invalid result from tool {tool_name}: {e}")

        if result.isError:
            error_text = self.convert_result_to_text(result)
            self.logger.error(f"Tool {tool_name} reported an error: {error_text}")
            raise ToolExecutionError(f"Tool {tool_name} failed: {error_text}")
        return result

    async def _read_message(self, response: httpx.Response):
        """
        Decode the JSON-RPC reply from a JSON body or from the first
        response/error event of an event stream.
        """
        content_type = response.headers.get("content-type", "")
        try:
            if content_type.startswith("text/event-stream"):
                async for sse in EventSource(response).aiter_sse():
                    if sse.event != "message" or not sse.data:
                        continue
                    message = JSONRPCMessage.model_validate_json(sse.data).root
                    if isinstance(message, (JSONRPCResponse, JSONRPCError)):
                        return message
                raise ToolExecutionError("Tool server event stream carried no response")

            await response.aread()
            return JSONRPCMessage.model_validate_json(response.content).root
        except ValidationError as e:
            raise ToolExecutionError(f"Invalid tool server response: {e}")

    def convert_result_to_text(self, result: Optional[CallToolResult]) -> str:
        """Convert a tools/call result to plain text."""
        if not result or not hasattr(result, "content"):
            return ""

        text_chunks = [
            getattr(c, "text", str(c))
            for c in (result.content or [])
        ]
        return "\n".join(text_chunks)

    async def cleanup(self):
        if self._client:
            await self._client.aclose()
            self._client = None
            self.logger.info("Closed tool server client")
