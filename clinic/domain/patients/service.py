from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from clinic.core.exceptions import NotFoundError, handle_database_error
from clinic.domain.patients.repository import PatientRepository
from clinic.api.v1.patients.schemas import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    GetPatientByIdInput
)

logger = logging.getLogger(__name__)


class PatientService:
    """Service layer for patient registration"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.patient_repo = PatientRepository(db)

    async def create_patient(self, patient_data: PatientCreate) -> PatientResponse:
        """Register a new patient"""
        try:
            patient = await self.patient_repo.create(patient_data.model_dump())
        except SQLAlchemyError as e:
            raise handle_database_error(e, "create patient") from e

        logger.info(f"Registered patient {patient.id}")
        return PatientResponse.model_validate(patient)

    async def get_patients(self) -> List[PatientResponse]:
        """Every registered patient"""
        try:
            patients = await self.patient_repo.get_all()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list patients") from e

        return [PatientResponse.model_validate(patient) for patient in patients]

    async def get_patient_by_id(self, query: GetPatientByIdInput) -> Optional[PatientResponse]:
        """Get patient by ID, None when absent"""
        try:
            patient = await self.patient_repo.get_by_id(query.id)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "get patient") from e

        if patient is None:
            return None
        return PatientResponse.model_validate(patient)

    async def update_patient(self, patient_data: PatientUpdate) -> PatientResponse:
        """Update only the fields present in the input"""
        try:
            patient = await self.patient_repo.update(patient_data.id, patient_data.changes())
        except SQLAlchemyError as e:
            raise handle_database_error(e, "update patient") from e

        if patient is None:
            logger.error(f"Patient update failed: no patient with id {patient_data.id}")
            raise NotFoundError(
                message=f"Patient with id {patient_data.id} not found",
                details={"id": patient_data.id},
                error_code="PATIENT_NOT_FOUND"
            )

        return PatientResponse.model_validate(patient)

    async def count_patients(self) -> int:
        try:
            return await self.patient_repo.count()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "count patients") from e
