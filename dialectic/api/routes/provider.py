"""Provider info route."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import IApplication


class ProviderResponse(BaseModel):
    """Response model for provider info."""

    provider: str
    model: str


def create_provider_router(app: IApplication) -> APIRouter:
    """Create provider router."""
    router = APIRouter(prefix="/api", tags=["provider"])

    @router.get("/provider", response_model=ProviderResponse)
    async def get_provider() -> dict:
        """Which vendor and model answer requests."""
        provider = app.provider
        return {"provider": provider.name, "model": provider.model}

    return router
