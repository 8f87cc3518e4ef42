from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from clinic.infrastructure.database import Base, enum_values
from clinic.domain.patients.models import gender_type
from clinic.infrastructure.mixins import TimestampMixin
import enum


class DeliveryType(str, enum.Enum):
    """How the baby was delivered"""
    NORMAL = "normal"
    CAESAREAN = "caesarean"
    ASSISTED = "assisted"


# Kilograms, two decimals
BABY_WEIGHT_SCALE = 2


class DeliveryService(TimestampMixin, Base):
    """Delivery (birth) record, append-only"""
    __tablename__ = "delivery_services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    delivery_date = Column(Date, nullable=False)
    delivery_type = Column(
        Enum(DeliveryType, name="delivery_type", values_callable=enum_values),
        nullable=False
    )
    baby_weight = Column(Numeric(5, BABY_WEIGHT_SCALE), nullable=False)
    baby_gender = Column(gender_type, nullable=False)
    baby_name = Column(Text)
    complications = Column(Text)
    doctor_name = Column(Text, nullable=False)
    notes = Column(Text)

    patient = relationship("Patient")
