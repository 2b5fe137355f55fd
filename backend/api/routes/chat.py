"""
Chat relay endpoint - forwards chat completions to Fireworks
"""

import logging
from typing import Any
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, StreamingResponse

from api.dependencies import get_chat_relay
from api.schemas.chat import ErrorResponse
from services.chat_relay_service import ChatRelayService
from core.exceptions import RelayException, BadRequestError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

# Sent on plain OPTIONS; requests carrying Origin get theirs from CORSMiddleware
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Vary": "Origin",
}


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        raise BadRequestError("Request body must be valid JSON")


@router.options("/chat", status_code=status.HTTP_204_NO_CONTENT)
async def chat_options():
    """Preflight without Origin headers (the CORS middleware answers real preflights)"""
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)


@router.post(
    "/chat",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def chat(
    request: Request,
    relay: ChatRelayService = Depends(get_chat_relay),
):
    """
    Relay a chat completion request to Fireworks.

    The credential is checked first, then the body is validated. The last
    user message may trigger one tool call whose result is appended as a
    system message before the upstream call.

    Returns:
        - stream=false: the provider completion JSON, unmodified
        - stream=true: the provider event stream, byte for byte

    Raises:
        RelayException: Rendered as {error, message} by the app exception handlers
    """
    model = "unknown"
    try:
        api_key = relay.resolve_api_key(request.headers.get("Authorization"))
        body = await _read_json_body(request)
        if isinstance(body, dict) and body.get("model"):
            model = str(body["model"])
        chat_request = relay.parse_request(body)
        payload = await relay.prepare_payload(chat_request)

        if payload["stream"]:
            stream = await relay.open_stream(payload, api_key)
            return StreamingResponse(
                stream,
                media_type="text/event-stream",
                headers=STREAM_HEADERS,
            )

        data = await relay.complete(payload, api_key)
        return JSONResponse(content=data, status_code=status.HTTP_200_OK)
    except RelayException:
        raise
    except Exception as e:
        logger.error(f"Chat API error: {e}", exc_info=True)
        raise RelayException(str(e), model=model)
