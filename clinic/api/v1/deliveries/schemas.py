from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, date

from clinic.core.coercion import NUMERIC_5_2_LIMIT, to_float
from clinic.domain.deliveries.models import DeliveryType
from clinic.domain.patients.models import Gender


class BaseDeliveryServiceSchema(BaseModel):
    """Base schema for delivery records"""
    patient_id: int
    delivery_date: date
    delivery_type: DeliveryType
    baby_gender: Gender
    baby_name: Optional[str] = None
    complications: Optional[str] = None
    doctor_name: str = Field(..., min_length=1)
    notes: Optional[str] = None


class DeliveryServiceCreate(BaseDeliveryServiceSchema):
    """Schema for recording a delivery"""
    baby_weight: float = Field(
        ..., gt=0, lt=NUMERIC_5_2_LIMIT, allow_inf_nan=False, description="Baby weight in kg"
    )


class DeliveryServiceResponse(BaseDeliveryServiceSchema):
    """Schema for delivery record response data"""
    id: int
    doctor_name: str
    baby_weight: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("baby_weight", mode="before")
    @classmethod
    def numeric_to_float(cls, v):
        return to_float(v)
