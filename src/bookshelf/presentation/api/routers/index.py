"""Root endpoint."""

from fastapi import APIRouter

from bookshelf.presentation.api.schemas.common import MessageResponse

router = APIRouter()


@router.get("/", summary="Welcome message")
async def index() -> MessageResponse:
    return MessageResponse(message="Welcome to the API! 🚀")
