"""Messaging API routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ...app import IApplication
from ...errors import ModelNotReady, ProcessingError
from ...models import ErrorKind


class MessageRequest(BaseModel):
    """Request model for sending a message."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    text: str


class MessageResponse(BaseModel):
    """Response model for message."""

    response: str


class ErrorResponse(BaseModel):
    """Generic error body. Never carries internal detail."""

    error: str


_ERRORS = {
    ErrorKind.MODEL_NOT_READY: (ModelNotReady.status_code, "Model not ready"),
    ErrorKind.PROCESSING_ERROR: (ProcessingError.status_code, "Internal Server Error"),
}


def create_messaging_router(app: IApplication) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post(
        "/message",
        response_model=MessageResponse,
        responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    )
    async def send_message(request: MessageRequest):
        """Classify a message and return the bot's reply."""
        result = await app.pipeline.handle(user_id=request.user_id, text=request.text)
        if result.ok:
            return {"response": result.response}

        status_code, error = _ERRORS[result.error_kind]
        return JSONResponse(status_code=status_code, content={"error": error})

    return router
