"""Client for the Dialectic API."""

from .generator import (
    PERSPECTIVE_FALLBACK_ERROR,
    SYNTHESIS_FALLBACK_ERROR,
    GenerationError,
    IResponseGenerator,
    ResponseGenerator,
)

__all__ = [
    "GenerationError",
    "IResponseGenerator",
    "ResponseGenerator",
    "PERSPECTIVE_FALLBACK_ERROR",
    "SYNTHESIS_FALLBACK_ERROR",
]
