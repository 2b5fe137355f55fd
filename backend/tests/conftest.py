from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from api.dependencies import get_chat_relay
from domain.agentic.mcp.client import MCPClient
from domain.agentic.orchestrator import ToolAugmenter
from domain.agentic.tools.registry import ToolRegistry
from domain.relay.fireworks_client import FireworksClient
from services.chat_relay_service import ChatRelayService

FIREWORKS_URL = "https://fireworks.test/inference/v1/chat/completions"
TOOL_SERVER_URL = "https://tools.test/api/server"

COMPLETION = {
    "id": "cmpl-1",
    "object": "chat.completion",
    "model": "accounts/fireworks/models/deepseek-coder-33b-instruct",
    "choices": [
        {"index": 0, "message": {"role": "assistant", "content": "Hi there"}, "finish_reason": "stop"}
    ],
    "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
}


class Recorder:
    """Collects requests seen by a mock transport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


def completion_handler(recorder: Recorder, body: dict = COMPLETION, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        recorder.requests.append(request)
        return httpx.Response(status_code, json=body)
    return handler


def tool_result_handler(recorder: Recorder, text: str):
    def handler(request: httpx.Request) -> httpx.Response:
        recorder.requests.append(request)
        rpc = json.loads(request.content)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": rpc["id"], "result": {"content": [{"type": "text", "text": text}]}},
        )
    return handler


def build_service(upstream_handler, api_key="test-key", tool_handler=None, **kwargs) -> ChatRelayService:
    fireworks_client = FireworksClient(
        api_url=FIREWORKS_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(upstream_handler)),
    )
    augmenter = None
    if tool_handler is not None:
        mcp_client = MCPClient(
            server_url=TOOL_SERVER_URL,
            client=httpx.AsyncClient(transport=httpx.MockTransport(tool_handler)),
        )
        registry = ToolRegistry()
        registry.register_external_tools(mcp_client)
        augmenter = ToolAugmenter(registry)
    return ChatRelayService(
        fireworks_client=fireworks_client,
        api_key=api_key,
        augmenter=augmenter,
        **kwargs,
    )


@pytest.fixture
def relay_client():
    """Factory: TestClient whose chat relay talks to mock transports."""

    def _client(upstream_handler, **kwargs) -> TestClient:
        service = build_service(upstream_handler, **kwargs)
        app.dependency_overrides[get_chat_relay] = lambda: service
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture
def upstream():
    return Recorder()


@pytest.fixture
def tools():
    return Recorder()
