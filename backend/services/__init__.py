"""
Service layer (business logic orchestration)
"""

from services.base import BaseService
from services.chat_relay_service import ChatRelayService

__all__ = [
    "BaseService",
    "ChatRelayService",
]
