"""
FastAPI dependencies
"""

from fastapi import Request
from services.chat_relay_service import ChatRelayService


def get_chat_relay(request: Request) -> ChatRelayService:
    return request.app.state.chat_relay_service
