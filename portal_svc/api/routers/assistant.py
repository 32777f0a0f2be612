"""
Assistant router - keyword-matched health chat.
"""
from fastapi import APIRouter, Depends

from core.dependencies import get_assistant_service
from schemas import ChatRequest, ChatResponse
from services import AssistantService

router = APIRouter(
    prefix="/api/v1/assistant",
    tags=["Health Assistant"],
)


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Ask the health assistant",
    description="Answers questions about stress, sleep, exercise and diet with canned advice."
)
async def chat(
    request: ChatRequest,
    assistant_service: AssistantService = Depends(get_assistant_service)
):
    return assistant_service.chat(request.message)
