from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, date

from clinic.api.v1.common import PartialUpdateSchema
from clinic.core.coercion import NUMERIC_4_1_LIMIT, NUMERIC_5_2_LIMIT, to_float
from clinic.domain.checkups.models import CheckupType


class MedicalCheckupCreate(BaseModel):
    """Schema for logging a medical checkup"""
    patient_id: int
    checkup_date: date
    checkup_type: CheckupType
    weight: Optional[float] = Field(None, gt=0, lt=NUMERIC_5_2_LIMIT, allow_inf_nan=False, description="kg")
    height: Optional[float] = Field(None, gt=0, lt=NUMERIC_5_2_LIMIT, allow_inf_nan=False, description="cm")
    blood_pressure: Optional[str] = None
    temperature: Optional[float] = Field(
        None, gt=-NUMERIC_4_1_LIMIT, lt=NUMERIC_4_1_LIMIT, allow_inf_nan=False, description="Celsius"
    )
    heart_rate: Optional[int] = Field(None, gt=0, description="Beats per minute")
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    medication_prescribed: Optional[str] = None
    doctor_name: str = Field(..., min_length=1)
    next_checkup_date: Optional[date] = None
    notes: Optional[str] = None


class MedicalCheckupUpdate(PartialUpdateSchema):
    """Schema for updating a medical checkup"""
    NON_NULLABLE = ("patient_id", "checkup_date", "checkup_type", "doctor_name")

    patient_id: Optional[int] = None
    checkup_date: Optional[date] = None
    checkup_type: Optional[CheckupType] = None
    weight: Optional[float] = Field(None, gt=0, lt=NUMERIC_5_2_LIMIT, allow_inf_nan=False)
    height: Optional[float] = Field(None, gt=0, lt=NUMERIC_5_2_LIMIT, allow_inf_nan=False)
    blood_pressure: Optional[str] = None
    temperature: Optional[float] = Field(None, gt=-NUMERIC_4_1_LIMIT, lt=NUMERIC_4_1_LIMIT, allow_inf_nan=False)
    heart_rate: Optional[int] = Field(None, gt=0)
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    medication_prescribed: Optional[str] = None
    doctor_name: Optional[str] = Field(None, min_length=1)
    next_checkup_date: Optional[date] = None
    notes: Optional[str] = None


class MedicalCheckupResponse(BaseModel):
    """Schema for medical checkup response data"""
    id: int
    patient_id: int
    checkup_date: date
    checkup_type: CheckupType
    weight: Optional[float] = None
    height: Optional[float] = None
    blood_pressure: Optional[str] = None
    temperature: Optional[float] = None
    heart_rate: Optional[int] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment: Optional[str] = None
    medication_prescribed: Optional[str] = None
    doctor_name: str
    next_checkup_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("weight", "height", "temperature", mode="before")
    @classmethod
    def numeric_to_float(cls, v):
        return to_float(v)
