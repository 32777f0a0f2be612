"""
Pydantic schemas for the BMI calculator and its history.
"""
from typing import Optional

from pydantic import BaseModel, Field


class BmiRequest(BaseModel):
    height: float = Field(..., gt=0, le=300, description="Height in cm", examples=[170])
    weight: float = Field(..., gt=0, le=500, description="Weight in kg", examples=[70])


class BmiRecordResponse(BaseModel):
    id: str
    user_id: str
    bmi: float
    category: str
    height: float
    weight: float
    calculated_at: str


class BmiResponse(BaseModel):
    """
    Calculated BMI.

    `saved` tells whether the result was stored in the caller's history,
    which only happens for signed-in callers.
    """
    bmi: float = Field(..., examples=[24.2])
    category: str = Field(..., examples=["Normal weight"])
    recommendation: str
    saved: bool = False
    record: Optional[BmiRecordResponse] = None
