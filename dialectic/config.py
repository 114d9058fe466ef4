"""Project-level configuration and provider settings."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

PROJECT_ROOT = Path(__file__).resolve().parent.parent
LOGS_DIR = Path(os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")))
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_API_HOST = "localhost"
DEFAULT_API_PORT = 8000
DEFAULT_CORS_ORIGINS = ["http://localhost:3000"]

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-6"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

SUPPORTED_PROVIDERS: tuple[str, ...] = ("anthropic", "openai")


@dataclass
class ProviderSettings:
    """Credentials and model name for one provider."""

    api_key: str = ""
    model: str = ""


@dataclass
class AIConfig:
    """Selected provider plus settings for every supported provider."""

    provider: str = "anthropic"
    anthropic: ProviderSettings = field(
        default_factory=lambda: ProviderSettings(model=DEFAULT_ANTHROPIC_MODEL)
    )
    openai: ProviderSettings = field(
        default_factory=lambda: ProviderSettings(model=DEFAULT_OPENAI_MODEL)
    )

    @property
    def selected(self) -> ProviderSettings:
        """Settings of the selected provider."""
        if self.provider == "openai":
            return self.openai
        return self.anthropic


def get_ai_config(env: Mapping[str, str] | None = None) -> AIConfig:
    """Build AIConfig from environment variables."""
    if env is None:
        env = os.environ

    return AIConfig(
        provider=(env.get("AI_PROVIDER") or "anthropic").strip().lower(),
        anthropic=ProviderSettings(
            api_key=env.get("ANTHROPIC_API_KEY", ""),
            model=env.get("ANTHROPIC_MODEL") or DEFAULT_ANTHROPIC_MODEL,
        ),
        openai=ProviderSettings(
            api_key=env.get("OPENAI_API_KEY", ""),
            model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        ),
    )


def validate_ai_config(config: AIConfig) -> str | None:
    """Return an error message if the selected provider can't be used."""
    if config.provider not in SUPPORTED_PROVIDERS:
        return (
            f"Unsupported AI provider: {config.provider}. "
            f"Set AI_PROVIDER to one of: {', '.join(SUPPORTED_PROVIDERS)}."
        )

    if config.provider == "openai" and not config.openai.api_key:
        return (
            "OpenAI API key not configured. "
            "Please set the OPENAI_API_KEY environment variable."
        )

    if config.provider == "anthropic" and not config.anthropic.api_key:
        return (
            "Anthropic API key not configured. "
            "Please set the ANTHROPIC_API_KEY environment variable."
        )

    return None


def get_cors_origins(env: Mapping[str, str] | None = None) -> list[str]:
    """Parse CORS_ORIGINS (comma-separated)."""
    if env is None:
        env = os.environ

    raw = env.get("CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


def get_api_url(env: Mapping[str, str] | None = None) -> str:
    """Base URL the console client talks to."""
    if env is None:
        env = os.environ

    explicit = env.get("DIALECTIC_API_URL")
    if explicit:
        return explicit.rstrip("/")

    host = env.get("API_HOST", DEFAULT_API_HOST)
    port = env.get("API_PORT", str(DEFAULT_API_PORT))
    return f"http://{host}:{port}"
