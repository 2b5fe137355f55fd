"""
Model keyword resolution (short keyword -> Fireworks model identifier)
"""

from typing import Dict, Optional

DEEPSEEK_MODEL_ID = "accounts/fireworks/models/deepseek-coder-33b-instruct"
QWEN_MODEL_ID = "accounts/fireworks/models/qwen3-30b-a3b"

# Unknown or missing keywords fall back to this identifier
DEFAULT_MODEL_ID = DEEPSEEK_MODEL_ID

MODEL_MAP: Dict[str, str] = {
    "deepseek": DEEPSEEK_MODEL_ID,
    "qwen": QWEN_MODEL_ID,
}


def resolve_model(keyword: Optional[str]) -> str:
    """
    Map a model keyword to a fully-qualified upstream model identifier.

    Matching is case-insensitive on the trimmed keyword. Every unrecognized
    keyword (and None) resolves to DEFAULT_MODEL_ID.
    """
    if not keyword:
        return DEFAULT_MODEL_ID
    return MODEL_MAP.get(keyword.strip().lower(), DEFAULT_MODEL_ID)
