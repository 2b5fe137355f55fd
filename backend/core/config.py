"""
Unified configuration and settings
Completion provider, sampling defaults and tool server config
"""

from typing import List
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values can be set via:
    1. Environment variables (highest priority)
    2. .env file (loaded by load_dotenv())
    3. Default values below (lowest priority)
    """

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    # ------------------------
    # Completion provider: Fireworks AI
    # ------------------------

    fireworks_api_key: str = ""
    fireworks_api_url: str = "https://api.fireworks.ai/inference/v1/chat/completions"
    fireworks_timeout: float = 300.0
    # Use the caller's bearer token when no server key is configured
    forward_client_authorization: bool = False

    # Model keyword used when the request carries none ("deepseek" or "qwen")
    default_model: str = "deepseek"
    require_model: bool = False

    # ------------------------
    # Sampling defaults
    # ------------------------

    default_temperature: float = 0.1
    default_top_p: float = 0.9
    default_top_k: int = 40
    default_max_tokens: int = 16384
    default_presence_penalty: float = 0.0
    default_frequency_penalty: float = 0.0
    default_stream: bool = True

    # Canonical temperature range accepted by Fireworks
    temperature_min: float = 0.0
    temperature_max: float = 2.0

    # ------------------------
    # Tool server (JSON-RPC tools/call)
    # ------------------------

    # Empty disables tool augmentation
    tool_server_url: str = ""
    tool_server_timeout: float = 30.0
    web_search_max_results: int = 5
    default_timezone: str = "UTC"

    class Config:
        """
        Pydantic configuration for settings loading.

        - env_file: Which .env file to read
        - env_file_encoding: File encoding
        - extra: What to do with extra fields in .env that aren't in this class
        """
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra .env vars (like TAVILY_API_KEY used by the tool server)


# Singleton settings instance
settings = Settings()
