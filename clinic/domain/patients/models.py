from sqlalchemy import Column, Date, Enum, Integer, Text
from clinic.infrastructure.database import Base, enum_values
from clinic.infrastructure.mixins import TimestampMixin
import enum


class Gender(str, enum.Enum):
    """Gender enumeration"""
    MALE = "male"
    FEMALE = "female"


# Shared by patients.gender and delivery_services.baby_gender
gender_type = Enum(Gender, name="gender", values_callable=enum_values)


class Patient(TimestampMixin, Base):
    """Registered clinic patient"""
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(gender_type, nullable=False)
    phone = Column(Text)
    address = Column(Text)
