"""Synthesis API routes."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from ...app import IApplication
from ...logging_config import get_logger
from ...prompts import SYNTHESIS_SETTINGS, build_synthesis_messages
from ...streaming import EVENT_STREAM_MEDIA_TYPE, prime_stream, relay_stream

logger = get_logger(__name__)

GENERATION_ERROR = "An error occurred while generating the synthesis"


class SynthesisRequest(BaseModel):
    """Request model for a synthesis of the whole conversation."""

    model_config = ConfigDict(populate_by_name=True)

    user_messages: list[str] | None = Field(None, alias="userMessages")
    perspective_a_messages: list[str] | None = Field(None, alias="perspectiveAMessages")
    perspective_b_messages: list[str] | None = Field(None, alias="perspectiveBMessages")
    stream: bool = True


class SynthesisResponse(BaseModel):
    """Response model for a non-streamed synthesis."""

    synthesis: str


def create_synthesis_router(app: IApplication) -> APIRouter:
    """Create synthesis router."""
    router = APIRouter(prefix="/api", tags=["synthesis"])

    @router.post("/synthesis", response_model=SynthesisResponse)
    async def generate_synthesis(request: SynthesisRequest):
        """Merge the user's messages and both personas' replies into a summary."""
        if (
            request.user_messages is None
            or request.perspective_a_messages is None
            or request.perspective_b_messages is None
        ):
            raise HTTPException(status_code=400, detail="Missing required message arrays")

        messages = build_synthesis_messages(
            request.user_messages,
            request.perspective_a_messages,
            request.perspective_b_messages,
        )
        logger.info(
            "Generating synthesis over %d user messages", len(request.user_messages)
        )

        try:
            if not request.stream:
                text = await app.provider.complete(
                    messages,
                    temperature=SYNTHESIS_SETTINGS.temperature,
                    max_tokens=SYNTHESIS_SETTINGS.max_tokens,
                )
                return {"synthesis": text or "I couldn't generate a synthesis. Please try again."}

            chunks = await prime_stream(
                app.provider.stream_chat(
                    messages,
                    temperature=SYNTHESIS_SETTINGS.temperature,
                    max_tokens=SYNTHESIS_SETTINGS.max_tokens,
                )
            )
        except Exception as e:
            logger.error("Error in synthesis API: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e) or GENERATION_ERROR)

        return StreamingResponse(
            relay_stream(chunks, GENERATION_ERROR),
            media_type=EVENT_STREAM_MEDIA_TYPE,
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    return router
