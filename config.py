"""Configuration settings for the SkillBridge client."""

# Load .env into os.environ so the EXPO_PUBLIC_* fallbacks below resolve too
from dotenv import load_dotenv

load_dotenv()

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator
from typing import Dict, Optional


# Emulator networking: the Android emulator reaches the host through 10.0.2.2
DEFAULT_API_BASES: Dict[str, str] = {
    "android": "http://10.0.2.2:5028",
    "host": "http://localhost:5028",
}
DEFAULT_AI_API_BASES: Dict[str, str] = {
    "android": "http://10.0.2.2:8080",
    "host": "http://localhost:8080",
}


class Settings(BaseSettings):
    """Global settings for the SkillBridge client.

    Settings can be overridden via environment variables with SKILLBRIDGE_ prefix.
    Example: SKILLBRIDGE_API_BASE=https://skillbridge.example.com
    """

    # Backends
    api_base: str = Field(
        default="",
        validation_alias=AliasChoices(
            "api_base", "SKILLBRIDGE_API_BASE", "EXPO_PUBLIC_SKILLBRIDGE_API_BASE"
        ),
        description="Base URL of the CRUD/recommendation API (empty = platform default)",
    )
    ai_api_base: str = Field(
        default="",
        validation_alias=AliasChoices(
            "ai_api_base", "SKILLBRIDGE_AI_API_BASE", "EXPO_PUBLIC_IA_BASE"
        ),
        description="Base URL of the generative AI API (empty = platform default)",
    )
    device_target: str = Field(
        default="host",
        description="Where the client runs: host, android (emulator) or device",
    )

    # Auth
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token applied at startup (env: SKILLBRIDGE_API_TOKEN)",
    )

    # Request shaping
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Transport timeout in seconds; unset means no timeout",
    )
    default_page_size: int = Field(
        default=10,
        ge=1,
        description="Page size used when the caller does not pass one",
    )
    default_top_n: int = Field(
        default=5,
        ge=1,
        description="Number of job recommendations requested by default",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI",
    )

    model_config = {
        "env_prefix": "SKILLBRIDGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("api_base", "ai_api_base", mode="before")
    @classmethod
    def _strip_base(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("device_target", mode="before")
    @classmethod
    def _normalize_target(cls, value):
        return str(value or "host").strip().lower()

    def resolve_api_base(self) -> str:
        """Explicit CRUD API base, or the default for the device target."""
        if self.api_base:
            return self.api_base
        return DEFAULT_API_BASES.get(self.device_target, DEFAULT_API_BASES["host"])

    def resolve_ai_api_base(self) -> str:
        """Explicit AI API base, or the default for the device target."""
        if self.ai_api_base:
            return self.ai_api_base
        return DEFAULT_AI_API_BASES.get(self.device_target, DEFAULT_AI_API_BASES["host"])


# Create singleton instance
settings = Settings()
