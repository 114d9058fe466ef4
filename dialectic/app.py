"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .config import AIConfig, get_ai_config, validate_ai_config
from .llm import IChatProvider, create_provider
from .logging_config import get_logger

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    @property
    def provider(self) -> IChatProvider:
        """The chat provider selected at start."""
        ...

    @property
    def config_error(self) -> str | None:
        """Why no provider could be built, if so."""
        ...

    async def start(self) -> None:
        """Read configuration and build the chat provider."""
        ...

    async def stop(self) -> None:
        """Release the provider's HTTP client."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        config: AIConfig | None = None,
        provider: IChatProvider | None = None,
    ):
        self._config = config
        self._provider = provider
        self._config_error: str | None = None
        self._started = False

    async def start(self) -> None:
        """Select the provider once; requests never switch it."""
        logger.info("Starting application")

        if self._config is None:
            self._config = get_ai_config()

        self._config_error = validate_ai_config(self._config)
        if self._config_error:
            # Stay up so every API call can report the problem
            logger.warning("Provider not configured: %s", self._config_error)
        elif self._provider is None:
            self._provider = create_provider(self._config)

        self._started = True
        if self._provider is not None:
            logger.info(
                "Application started",
                extra={"provider": self._provider.name, "model": self._provider.model},
            )

    async def stop(self) -> None:
        """Shutdown."""
        if self._provider is not None:
            await self._provider.aclose()
            logger.info("Chat provider closed")
        self._started = False

    @property
    def config(self) -> AIConfig:
        if self._config is None:
            raise RuntimeError("Application not started")
        return self._config

    @property
    def config_error(self) -> str | None:
        if not self._started:
            return "Application not started"
        return self._config_error

    @property
    def provider(self) -> IChatProvider:
        """Get chat provider instance."""
        if not self._started or self._provider is None:
            raise RuntimeError(self._config_error or "Application not started")
        return self._provider
