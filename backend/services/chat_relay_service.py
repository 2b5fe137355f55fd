"""
Chat relay service - orchestrates the relay: validate → resolve model → normalize → augment → dispatch
"""

import logging
from typing import Dict, Any, Optional, AsyncIterator
from pydantic import ValidationError

from api.schemas.chat import ChatRequest
from domain.agentic.orchestrator import ToolAugmenter
from domain.relay.fireworks_client import FireworksClient
from domain.relay.models import resolve_model
from domain.relay.parameters import SamplingDefaults, build_upstream_payload
from services.base import BaseService
from core.exceptions import BadRequestError, ConfigurationError

logger = logging.getLogger(__name__)


def _format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(parts)


class ChatRelayService(BaseService):
    """
    Forwards chat requests to Fireworks and relays the answer.

    The API key is injected at construction time so the service can be built
    in tests without touching the process environment.
    """

    def __init__(
        self,
        fireworks_client: FireworksClient,
        api_key: str = "",
        sampling_defaults: Optional[SamplingDefaults] = None,
        default_model: str = "deepseek",
        require_model: bool = False,
        forward_client_authorization: bool = False,
        augmenter: Optional[ToolAugmenter] = None,
    ):
        self.fireworks_client = fireworks_client
        self.api_key = api_key
        self.sampling_defaults = sampling_defaults or SamplingDefaults()
        self.default_model = default_model
        self.require_model = require_model
        self.forward_client_authorization = forward_client_authorization
        self.augmenter = augmenter

    def resolve_api_key(self, authorization: Optional[str] = None) -> str:
        """
        Credential used for the upstream call.

        Raises:
            ConfigurationError: If no credential is available
        """
        if self.api_key:
            return self.api_key

        if self.forward_client_authorization and authorization:
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() == "bearer" and token.strip():
                return token.strip()

        logger.error("FIREWORKS_API_KEY is not set")
        raise ConfigurationError("Fireworks API key not configured")

    def parse_request(self, body: Any) -> ChatRequest:
        """
        Validate the inbound JSON body.

        Raises:
            BadRequestError: If messages is missing/empty/malformed, or model is
                required and missing
        """
        if not isinstance(body, dict):
            raise BadRequestError("Request body must be a JSON object")

        if self.require_model and not body.get("model"):
            raise BadRequestError("Missing required field: model")

        try:
            return ChatRequest.model_validate(body)
        except ValidationError as e:
            if any(err.get("loc") and err["loc"][0] == "messages" for err in e.errors()):
                raise BadRequestError(f"Invalid messages format: {_format_validation_error(e)}")
            raise BadRequestError(f"Invalid request: {_format_validation_error(e)}")

    async def prepare_payload(self, chat_request: ChatRequest) -> Dict[str, Any]:
        """Resolve the model, augment the messages and build the upstream payload."""
        keyword = chat_request.model or self.default_model
        model_id = resolve_model(keyword)

        messages = chat_request.message_dicts()
        if self.augmenter is not None:
            messages = await self.augmenter.augment(messages)

        payload = build_upstream_payload(
            chat_request, model_id, messages, self.sampling_defaults
        )
        logger.info(f"Using model: {model_id} for {keyword} request (Stream: {payload['stream']})")
        return payload

    async def complete(self, payload: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        """Non-streaming relay; returns the provider JSON unaltered."""
        data = await self.fireworks_client.complete(payload, api_key)
        logger.info(f"Successfully processed {payload['model']} request (non-stream)")
        return data

    async def open_stream(self, payload: Dict[str, Any], api_key: str) -> AsyncIterator[bytes]:
        """
        Open the upstream event stream.

        Upstream errors are raised here, before any response bytes are sent.
        The returned iterator yields the upstream bytes verbatim.
        """
        response = await self.fireworks_client.open_stream(payload, api_key)
        return self.fireworks_client.iter_stream(response)
