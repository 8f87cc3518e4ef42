from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from clinic.infrastructure.database import Base, enum_values
from clinic.infrastructure.mixins import TimestampMixin
import enum


class CheckupType(str, enum.Enum):
    """Kind of medical checkup"""
    ROUTINE = "routine"
    PREGNANCY = "pregnancy"
    CHILD = "child"
    ADULT = "adult"
    ELDERLY = "elderly"


# Decimal places per numeric column
DECIMAL_SCALES = {
    "weight": 2,
    "height": 2,
    "temperature": 1,
}


class MedicalCheckup(TimestampMixin, Base):
    """Medical checkup log entry"""
    __tablename__ = "medical_checkups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    checkup_date = Column(Date, nullable=False)
    checkup_type = Column(
        Enum(CheckupType, name="checkup_type", values_callable=enum_values),
        nullable=False
    )

    # Vital signs
    weight = Column(Numeric(5, DECIMAL_SCALES["weight"]))            # kg
    height = Column(Numeric(5, DECIMAL_SCALES["height"]))            # cm
    blood_pressure = Column(Text)                                    # e.g. "120/80"
    temperature = Column(Numeric(4, DECIMAL_SCALES["temperature"]))  # Celsius
    heart_rate = Column(Integer)                                     # bpm

    # Clinical notes
    symptoms = Column(Text)
    diagnosis = Column(Text)
    treatment = Column(Text)
    medication_prescribed = Column(Text)
    doctor_name = Column(Text, nullable=False)
    next_checkup_date = Column(Date)
    notes = Column(Text)

    patient = relationship("Patient")
