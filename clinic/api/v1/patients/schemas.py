from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, date

from clinic.api.v1.common import PartialUpdateSchema
from clinic.domain.patients.models import Gender


class BasePatientSchema(BaseModel):
    """Base schema for patient data"""
    name: str = Field(..., min_length=1)
    date_of_birth: date
    gender: Gender
    phone: Optional[str] = None
    address: Optional[str] = None


class PatientCreate(BasePatientSchema):
    """Schema for registering a new patient"""


class PatientUpdate(PartialUpdateSchema):
    """Schema for updating patient information"""
    NON_NULLABLE = ("name", "date_of_birth", "gender")

    name: Optional[str] = Field(None, min_length=1)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class PatientResponse(BasePatientSchema):
    """Schema for patient response data"""
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GetPatientByIdInput(BaseModel):
    id: int
