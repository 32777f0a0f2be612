"""
Resources router - static emergency and physical health content.

Public endpoints; content comes from core/content.yaml.
"""
from fastapi import APIRouter, Depends

from core.dependencies import get_assistant_service
from schemas import (
    EmergencyAssistRequest,
    EmergencyAssistResponse,
    EmergencyResourcesResponse,
    PhysicalResourcesResponse,
)
from services import AssistantService

router = APIRouter(
    prefix="/api/v1/resources",
    tags=["Resources"],
)


@router.get(
    "/emergency",
    response_model=EmergencyResourcesResponse,
    summary="Emergency contacts and first aid"
)
async def emergency_resources(
    assistant_service: AssistantService = Depends(get_assistant_service)
):
    return assistant_service.emergency_resources()


@router.get(
    "/physical",
    response_model=PhysicalResourcesResponse,
    summary="Daily routine, nutrition and health tips"
)
async def physical_resources(
    assistant_service: AssistantService = Depends(get_assistant_service)
):
    return assistant_service.physical_resources()


@router.post(
    "/emergency/assist",
    response_model=EmergencyAssistResponse,
    summary="Emergency assistance",
    description="Returns fixed guidance pointing to emergency services and the contacts above."
)
async def emergency_assist(
    request: EmergencyAssistRequest,
    assistant_service: AssistantService = Depends(get_assistant_service)
):
    return assistant_service.emergency_assist(request.query)
