"""
Application startup and initialization logic
"""

import logging
from fastapi import FastAPI

from domain.relay.fireworks_client import FireworksClient
from domain.relay.parameters import SamplingDefaults
from domain.agentic.mcp.client import MCPClient
from domain.agentic.orchestrator import ToolAugmenter
from domain.agentic.tools.registry import ToolRegistry
from services.chat_relay_service import ChatRelayService
from core.config import Settings, settings

logger = logging.getLogger(__name__)


def build_sampling_defaults(app_settings: Settings) -> SamplingDefaults:
    return SamplingDefaults(
        temperature=app_settings.default_temperature,
        top_p=app_settings.default_top_p,
        top_k=app_settings.default_top_k,
        max_tokens=app_settings.default_max_tokens,
        presence_penalty=app_settings.default_presence_penalty,
        frequency_penalty=app_settings.default_frequency_penalty,
        stream=app_settings.default_stream,
        temperature_min=app_settings.temperature_min,
        temperature_max=app_settings.temperature_max,
    )


async def initialize_relay_system(app: FastAPI, app_settings: Settings = settings):
    """Initialize the Fireworks client, optional tool augmentation, and the relay service."""

    fireworks_client = FireworksClient(
        api_url=app_settings.fireworks_api_url,
        timeout=app_settings.fireworks_timeout,
    )
    if not app_settings.fireworks_api_key:
        # Not fatal: every chat request answers 500 until the key is set
        logger.warning("FIREWORKS_API_KEY is not set")

    # Tool augmentation is enabled by configuring a tool server
    mcp_client = None
    tool_registry = None
    augmenter = None
    if app_settings.tool_server_url:
        mcp_client = MCPClient(
            server_url=app_settings.tool_server_url,
            timeout=app_settings.tool_server_timeout,
        )
        tool_registry = ToolRegistry()
        tool_registry.register_external_tools(
            mcp_client,
            web_search_max_results=app_settings.web_search_max_results,
            timezone=app_settings.default_timezone,
        )
        augmenter = ToolAugmenter(tool_registry)
        logger.info(f"Tool augmentation enabled via {app_settings.tool_server_url}")
    else:
        logger.info("TOOL_SERVER_URL not set, tool augmentation disabled")

    chat_relay_service = ChatRelayService(
        fireworks_client=fireworks_client,
        api_key=app_settings.fireworks_api_key,
        sampling_defaults=build_sampling_defaults(app_settings),
        default_model=app_settings.default_model,
        require_model=app_settings.require_model,
        forward_client_authorization=app_settings.forward_client_authorization,
        augmenter=augmenter,
    )

    app.state.fireworks_client = fireworks_client
    app.state.mcp_client = mcp_client
    app.state.tool_registry = tool_registry
    app.state.chat_relay_service = chat_relay_service


async def cleanup_relay_system(app: FastAPI):
    """Close HTTP connections held by the Fireworks and tool server clients."""
    if getattr(app.state, "fireworks_client", None):
        try:
            await app.state.fireworks_client.close()
            logger.info("Fireworks client cleaned up")
        except Exception as e:
            logger.error(f"Error during Fireworks client cleanup: {e}", exc_info=True)

    if getattr(app.state, "mcp_client", None):
        try:
            await app.state.mcp_client.cleanup()
            logger.info("MCP client cleaned up")
        except Exception as e:
            logger.error(f"Error during MCP client cleanup: {e}", exc_info=True)
