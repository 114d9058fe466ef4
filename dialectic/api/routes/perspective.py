"""Perspective API routes."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from ...app import IApplication
from ...logging_config import get_logger
from ...models import PerspectiveType
from ...prompts import PERSPECTIVE_SETTINGS, build_perspective_messages
from ...streaming import EVENT_STREAM_MEDIA_TYPE, prime_stream, relay_stream

logger = get_logger(__name__)

GENERATION_ERROR = "An error occurred while generating the response"


class PerspectiveRequest(BaseModel):
    """Request model for one persona reply."""

    model_config = ConfigDict(populate_by_name=True)

    perspective: str | None = None
    user_message: str | None = Field(None, alias="userMessage")
    conversation_history: list[str] | None = Field(None, alias="conversationHistory")
    stream: bool = True


class PerspectiveResponse(BaseModel):
    """Response model for a non-streamed reply."""

    response: str


def create_perspective_router(app: IApplication) -> APIRouter:
    """Create perspective router."""
    router = APIRouter(prefix="/api", tags=["perspective"])

    @router.post("/perspective", response_model=PerspectiveResponse)
    async def generate_perspective(request: PerspectiveRequest):
        """Generate a reply from the supportive or critical persona."""
        if not request.perspective or not request.user_message:
            raise HTTPException(
                status_code=400,
                detail="Missing required fields: perspective and userMessage",
            )

        try:
            perspective = PerspectiveType(request.perspective)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail='Invalid perspective: must be "supportive" or "critical"',
            )

        messages = build_perspective_messages(
            perspective, request.user_message, request.conversation_history
        )
        settings = PERSPECTIVE_SETTINGS[perspective]
        logger.info(
            "Generating %s reply (%d history entries)",
            perspective.value,
            len(request.conversation_history or []),
            extra={"perspective": perspective.value},
        )

        try:
            if not request.stream:
                text = await app.provider.complete(
                    messages,
                    temperature=settings.temperature,
                    max_tokens=settings.max_tokens,
                )
                return {"response": text or "I couldn't generate a response. Please try again."}

            chunks = await prime_stream(
                app.provider.stream_chat(
                    messages,
                    temperature=settings.temperature,
                    max_tokens=settings.max_tokens,
                )
            )
        except Exception as e:
            logger.error(
                "Error in perspective API: %s",
                e,
                exc_info=True,
                extra={"perspective": perspective.value},
            )
            raise HTTPException(status_code=500, detail=str(e) or GENERATION_ERROR)

        return StreamingResponse(
            relay_stream(chunks, GENERATION_ERROR),
            media_type=EVENT_STREAM_MEDIA_TYPE,
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    return router
