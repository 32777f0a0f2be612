"""
Pydantic schemas for profiles and the medical onboarding form.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BloodGroup(str, Enum):
    A_POSITIVE = "A+"
    A_NEGATIVE = "A-"
    B_POSITIVE = "B+"
    B_NEGATIVE = "B-"
    O_POSITIVE = "O+"
    O_NEGATIVE = "O-"
    AB_POSITIVE = "AB+"
    AB_NEGATIVE = "AB-"


class Allergy(str, Enum):
    FOOD = "Food"
    MEDICINE = "Medicine"
    SEASONAL = "Seasonal"
    NONE = "None"


class ChronicCondition(str, Enum):
    ASTHMA = "Asthma"
    DIABETES = "Diabetes"
    HEART_DISEASE = "Heart Disease"
    NONE = "None"


class ExerciseHabit(str, Enum):
    DAILY = "Daily"
    TWO_TO_THREE_A_WEEK = "2-3 times a week"
    ONCE_A_WEEK = "Once a week"
    RARELY = "Rarely"
    NEVER = "Never"


class DietType(str, Enum):
    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-vegetarian"
    VEGAN = "Vegan"
    OTHER = "Other"


class ProfileResponse(BaseModel):
    """Schema for profile responses."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    enrollment_number: Optional[str] = None
    course: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    height: Optional[float] = Field(None, description="Height in cm")
    weight: Optional[float] = Field(None, description="Weight in kg")
    blood_group: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    chronic_conditions: List[str] = Field(default_factory=list)
    medications: Optional[str] = None
    exercise_frequency: Optional[str] = None
    sleep_hours: Optional[float] = None
    stress_level: Optional[int] = None
    diet_type: Optional[str] = None
    medical_details_completed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProfileUpdate(BaseModel):
    """
    Editable profile fields.

    Only fields present in the request body are changed.
    """
    model_config = ConfigDict(extra="forbid")

    full_name: Optional[str] = Field(None, max_length=200)
    enrollment_number: Optional[str] = Field(None, max_length=50)
    course: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)
    age: Optional[int] = Field(None, ge=1, le=120)
    height: Optional[float] = Field(None, gt=0, le=300, description="Height in cm")
    weight: Optional[float] = Field(None, gt=0, le=500, description="Weight in kg")
    blood_group: Optional[BloodGroup] = None


class OnboardingRequest(BaseModel):
    """Medical details collected once before the dashboard unlocks."""
    model_config = ConfigDict(extra="forbid")

    height: float = Field(..., gt=0, le=300, description="Height in cm", examples=[170])
    weight: float = Field(..., gt=0, le=500, description="Weight in kg", examples=[65])
    blood_group: BloodGroup
    allergies: List[Allergy] = Field(default_factory=list)
    chronic_conditions: List[ChronicCondition] = Field(default_factory=list)
    medications: Optional[str] = Field(None, max_length=1000)
    exercise_frequency: ExerciseHabit
    sleep_hours: float = Field(..., ge=0, le=24)
    stress_level: int = Field(..., ge=1, le=10)
    diet_type: DietType
