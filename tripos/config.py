"""
Configuration management for Trip OS.
Supports OpenAI-compatible LLM providers: OpenRouter, OpenAI, Ollama, plus an offline mock.
"""
from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM Configuration
    llm_provider: Literal["openrouter", "openai", "ollama", "mock"] = "mock"
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_model: str = "google/gemini-2.0-flash-001"

    # LLM Parameters
    llm_temperature: float = 0.4
    llm_timeout_seconds: float = 180.0

    # Server Configuration
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True

    # Sharing
    public_base_url: str = "http://localhost:8000"
    share_store_capacity: int = 50

    # Share card rendering
    qr_service_url: str = "https://api.qrserver.com/v1/create-qr-code/"
    qr_timeout_seconds: float = 10.0
    card_font_path: Optional[str] = None
    card_font_bold_path: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_llm_config() -> dict:
    """Get LLM configuration based on provider."""
    config = {
        "api_key": settings.llm_api_key,
        "model": settings.llm_model,
        "temperature": settings.llm_temperature,
        "timeout": settings.llm_timeout_seconds,
    }

    # Set base URL based on provider
    if settings.llm_provider == "ollama":
        config["base_url"] = settings.llm_base_url or "http://localhost:11434/v1"
    elif settings.llm_provider == "openai":
        config["base_url"] = settings.llm_base_url or "https://api.openai.com/v1"
    else:  # openrouter
        config["base_url"] = settings.llm_base_url or "https://openrouter.ai/api/v1"

    return config
