"""Tests for Application."""

from unittest.mock import patch

import pytest

from dialectic.app import Application
from dialectic.config import AIConfig

from conftest import FakeProvider


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_keeps_injected_provider(self, ai_config):
        """Test that an injected provider is used as-is."""
        provider = FakeProvider()
        app = Application(config=ai_config, provider=provider)

        await app.start()

        assert app.provider is provider
        assert app.config_error is None

    @pytest.mark.asyncio
    async def test_start_builds_provider_from_config(self, ai_config):
        """Test that the provider is created once at start."""
        provider = FakeProvider()

        with patch("dialectic.app.create_provider", return_value=provider) as factory:
            app = Application(config=ai_config)
            await app.start()

        factory.assert_called_once_with(ai_config)
        assert app.provider is provider

    @pytest.mark.asyncio
    async def test_start_reads_environment(self, monkeypatch):
        """Test configuration from env vars when none is passed."""
        monkeypatch.setenv("AI_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        with patch("dialectic.app.create_provider", return_value=FakeProvider()):
            app = Application()
            await app.start()

        assert app.config.provider == "openai"

    @pytest.mark.asyncio
    async def test_missing_key_records_error(self):
        """Test that a missing key doesn't crash start but blocks the provider."""
        app = Application(config=AIConfig(provider="anthropic"))

        await app.start()

        assert "ANTHROPIC_API_KEY" in app.config_error
        with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
            _ = app.provider

    def test_not_started(self):
        """Test accessors before start."""
        app = Application()

        assert app.config_error == "Application not started"
        with pytest.raises(RuntimeError):
            _ = app.provider
        with pytest.raises(RuntimeError):
            _ = app.config


class TestApplicationStop:
    """Tests for Application.stop()."""

    @pytest.mark.asyncio
    async def test_stop_closes_provider(self, application, fake_provider):
        """Test that stop releases the provider client."""
        await application.stop()

        assert fake_provider.closed is True
        assert application.config_error == "Application not started"

    @pytest.mark.asyncio
    async def test_stop_without_provider(self):
        """Test stop when no provider was built."""
        app = Application(config=AIConfig(provider="openai"))
        await app.start()

        await app.stop()
