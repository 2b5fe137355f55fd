"""
Sampling parameter normalization and upstream payload construction
"""

from typing import Dict, Any, List, Optional
from pydantic import BaseModel

from api.schemas.chat import ChatRequest


class SamplingDefaults(BaseModel):
    """Defaults applied to sampling parameters the caller omitted"""
    temperature: float = 0.1
    top_p: float = 0.9
    top_k: int = 40
    max_tokens: int = 16384
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    stream: bool = True

    # Canonical accepted temperature range
    temperature_min: float = 0.0
    temperature_max: float = 2.0


def clamp_temperature(value: float, low: float = 0.0, high: float = 2.0) -> float:
    """Clamp temperature into [low, high]. Values inside the range pass unchanged."""
    return max(low, min(float(value), high))


def _pick(value: Optional[Any], default: Any) -> Any:
    return default if value is None else value


def build_upstream_payload(
    request: ChatRequest,
    model_id: str,
    messages: List[Dict[str, Any]],
    defaults: SamplingDefaults,
) -> Dict[str, Any]:
    """
    Build the Fireworks chat completion payload.

    Args:
        request: Validated inbound request
        model_id: Resolved upstream model identifier
        messages: Message list to send (possibly augmented)
        defaults: Sampling defaults and temperature range

    Returns:
        JSON-serializable payload
    """
    temperature = clamp_temperature(
        _pick(request.temperature, defaults.temperature),
        defaults.temperature_min,
        defaults.temperature_max,
    )

    payload = {
        "model": model_id,
        "messages": messages,
        "temperature": temperature,
        "top_p": _pick(request.top_p, defaults.top_p),
        "top_k": _pick(request.top_k, defaults.top_k),
        "max_tokens": _pick(request.max_tokens, defaults.max_tokens),
        "presence_penalty": _pick(request.presence_penalty, defaults.presence_penalty),
        "frequency_penalty": _pick(request.frequency_penalty, defaults.frequency_penalty),
        "stream": _pick(request.stream, defaults.stream),
    }

    # tool_choice only makes sense alongside tools
    if request.tools:
        payload["tools"] = request.tools
        if request.tool_choice is not None:
            payload["tool_choice"] = request.tool_choice

    return payload
