"""
Completion relay: model resolution, parameter normalization, Fireworks client
"""

from domain.relay.models import resolve_model, MODEL_MAP, DEFAULT_MODEL_ID
from domain.relay.parameters import SamplingDefaults, clamp_temperature, build_upstream_payload
from domain.relay.fireworks_client import FireworksClient, extract_error_message

__all__ = [
    "resolve_model",
    "MODEL_MAP",
    "DEFAULT_MODEL_ID",
    "SamplingDefaults",
    "clamp_temperature",
    "build_upstream_payload",
    "FireworksClient",
    "extract_error_message",
]
