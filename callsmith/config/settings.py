"""Environment-driven settings for callsmith using pydantic-settings."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CallsmithSettings(BaseSettings):
    """
    Settings for the request preparation engine.

    All settings can be overridden via environment variables with the
    CALLSMITH_ prefix. For example, CALLSMITH_TOOLS_MODEL overrides
    tools_model.

    Security:
        API keys use SecretStr to prevent accidental logging.
        Access the value with `.get_secret_value()`.
    """

    # Provider selection
    llm_provider: str = Field("openai", description="openai or anthropic")
    tools_model: str = Field("gpt-4o-mini", description="Model used for parameter inference")

    # Provider credentials
    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = Field(None, description="OpenAI-compatible endpoint")
    anthropic_api_key: SecretStr | None = None

    # Inference
    temperature: float = Field(0.0, ge=0, le=2)
    max_tokens: int = Field(1024, ge=1)
    inference_timeout: float | None = Field(
        None, gt=0, description="Seconds to wait for the model before giving up"
    )

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CALLSMITH_", case_sensitive=False)
