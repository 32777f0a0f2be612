"""
Domain model for student profiles.
"""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class Profile:
    """
    Per-user profile row.

    Created on first sign-in with medical_details_completed=False and filled
    in by the medical onboarding step and profile edits.
    """

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    enrollment_number: Optional[str] = None
    course: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    blood_group: Optional[str] = None
    allergies: List[str] = field(default_factory=list)
    chronic_conditions: List[str] = field(default_factory=list)
    medications: Optional[str] = None
    exercise_frequency: Optional[str] = None
    sleep_hours: Optional[float] = None
    stress_level: Optional[int] = None
    diet_type: Optional[str] = None
    medical_details_completed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Full name, falling back to the email address."""
        return self.full_name or self.email or ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """
        Build a Profile from a store row.

        Unknown columns are ignored and NULL list columns become empty lists.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for list_field in ("allergies", "chronic_conditions"):
            if values.get(list_field) is None:
                values[list_field] = []
        values["medical_details_completed"] = bool(values.get("medical_details_completed"))
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
