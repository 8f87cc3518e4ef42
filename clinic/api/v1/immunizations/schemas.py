from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, date

from clinic.domain.immunizations.models import VaccineType


class BaseImmunizationSchema(BaseModel):
    """Base schema for immunization records"""
    patient_id: int
    vaccine_name: str = Field(..., min_length=1)
    vaccine_type: VaccineType
    vaccination_date: date
    next_vaccination_date: Optional[date] = None
    batch_number: Optional[str] = None
    administered_by: str = Field(..., min_length=1)
    side_effects: Optional[str] = None
    notes: Optional[str] = None


class ImmunizationCreate(BaseImmunizationSchema):
    """Schema for recording a vaccination"""


class ImmunizationResponse(BaseImmunizationSchema):
    """Schema for immunization response data"""
    id: int
    vaccine_name: str
    administered_by: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
