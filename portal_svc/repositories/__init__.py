"""
Repository layer for record store access.

This module contains all table access operations, encapsulating persistence
details behind the RecordStore contract.
"""
from repositories.base import RecordStore, SQLiteRecordStore
from repositories.profile_repository import ProfileRepository
from repositories.assessment_repository import AssessmentRepository
from repositories.bmi_repository import BmiRepository
from repositories.medical_record_repository import MedicalRecordRepository

__all__ = [
    "RecordStore",
    "SQLiteRecordStore",
    "ProfileRepository",
    "AssessmentRepository",
    "BmiRepository",
    "MedicalRecordRepository",
]
