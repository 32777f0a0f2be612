"""
Pydantic schemas for static health resources and the health assistant.
"""
from typing import List

from pydantic import BaseModel, Field


class EmergencyContact(BaseModel):
    name: str
    number: str


class Hospital(BaseModel):
    name: str
    address: str
    phone: str
    distance: str


class EmergencyAction(BaseModel):
    condition: str
    action: str


class FirstAid(BaseModel):
    cpr_steps: List[str]
    common_emergencies: List[EmergencyAction]


class EmergencyResourcesResponse(BaseModel):
    contacts: List[EmergencyContact]
    hospitals: List[Hospital]
    first_aid: FirstAid


class RoutineItem(BaseModel):
    time: str
    activity: str


class NutritionTip(BaseModel):
    title: str
    description: str


class TipSection(BaseModel):
    title: str
    tips: List[str]


class PhysicalResourcesResponse(BaseModel):
    daily_routine: List[RoutineItem]
    nutrition: List[NutritionTip]
    health_tips: List[TipSection]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000, examples=["I can't sleep before exams"])


class ChatResponse(BaseModel):
    reply: str


class EmergencyAssistRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=2000,
                       examples=["I'm experiencing severe chest pain and shortness of breath"])


class EmergencyAssistResponse(BaseModel):
    response: str
