from clinic.domain.patients.models import Patient, Gender
from clinic.domain.deliveries.models import DeliveryService, DeliveryType
from clinic.domain.immunizations.models import Immunization, VaccineType
from clinic.domain.checkups.models import MedicalCheckup, CheckupType

__all__ = [
    "Patient",
    "Gender",
    "DeliveryService",
    "DeliveryType",
    "Immunization",
    "VaccineType",
    "MedicalCheckup",
    "CheckupType",
]
