"""
Pydantic models for chat relay request/response schemas
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Any, List, Optional, Union, Literal


class ChatMessage(BaseModel):
    """
    Single conversation message.

    Provider-native keys (tool_calls, tool_call_id, name) are kept as extra
    fields so they reach the completion provider untouched.
    """
    role: Literal["system", "user", "assistant", "tool"] = Field(
        ..., description="system|user|assistant|tool"
    )
    content: Optional[Union[str, List[Dict[str, Any]]]] = Field(
        None, description="Message text (None for assistant tool-call messages)"
    )

    model_config = ConfigDict(extra="allow")


class ChatRequest(BaseModel):
    """Request model for the chat relay endpoint"""
    messages: List[ChatMessage] = Field(..., min_length=1)
    model: Optional[str] = Field(
        default=None,
        description="Model keyword ('deepseek', 'qwen'). Unknown keywords use the default model.",
    )
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    stream: Optional[bool] = None

    # Provider-native tool calling, passed through
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Union[str, Dict[str, Any]]] = None

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "messages": [{"role": "user", "content": "hello"}],
                "model": "deepseek",
                "stream": False,
            }
        },
    )

    def message_dicts(self) -> List[Dict[str, Any]]:
        """Messages in provider format (extra keys preserved)"""
        return [msg.model_dump() for msg in self.messages]


class ErrorResponse(BaseModel):
    """Uniform error envelope"""
    error: str
    message: str
    model: Optional[str] = Field(None, description="Requested model keyword, set on internal errors")
