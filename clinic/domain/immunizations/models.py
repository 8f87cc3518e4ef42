from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from clinic.infrastructure.database import Base, enum_values
from clinic.infrastructure.mixins import TimestampMixin
import enum


class VaccineType(str, enum.Enum):
    """Immunization schedule category"""
    BASIC = "basic"
    ADDITIONAL = "additional"
    BOOSTER = "booster"


class Immunization(TimestampMixin, Base):
    """Vaccination record, append-only"""
    __tablename__ = "immunizations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    vaccine_name = Column(Text, nullable=False)
    vaccine_type = Column(
        Enum(VaccineType, name="vaccine_type", values_callable=enum_values),
        nullable=False
    )
    vaccination_date = Column(Date, nullable=False)
    next_vaccination_date = Column(Date)
    batch_number = Column(Text)
    administered_by = Column(Text, nullable=False)
    side_effects = Column(Text)
    notes = Column(Text)

    patient = relationship("Patient")
