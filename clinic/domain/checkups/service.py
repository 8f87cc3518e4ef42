from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from clinic.core.exceptions import (
    NotFoundError,
    handle_database_error,
    handle_patient_reference_error
)
from clinic.domain.checkups.repository import MedicalCheckupRepository
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.checkups.schemas import (
    MedicalCheckupCreate,
    MedicalCheckupUpdate,
    MedicalCheckupResponse
)

logger = logging.getLogger(__name__)


class MedicalCheckupService:
    """Service layer for medical checkup logs"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.checkup_repo = MedicalCheckupRepository(db)

    async def create_medical_checkup(self, checkup_data: MedicalCheckupCreate) -> MedicalCheckupResponse:
        """Log a checkup for an existing patient"""
        try:
            checkup = await self.checkup_repo.create(checkup_data.model_dump())
        except SQLAlchemyError as e:
            raise handle_patient_reference_error(
                e, checkup_data.patient_id, "Medical checkup creation"
            ) from e

        logger.info(f"Logged checkup {checkup.id} for patient {checkup.patient_id}")
        return MedicalCheckupResponse.model_validate(checkup)

    async def get_medical_checkups(self) -> List[MedicalCheckupResponse]:
        try:
            checkups = await self.checkup_repo.get_all()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list medical checkups") from e

        return [MedicalCheckupResponse.model_validate(c) for c in checkups]

    async def get_medical_checkups_by_patient(self, query: GetByPatientIdInput) -> List[MedicalCheckupResponse]:
        """A patient's checkups, newest checkup_date first"""
        try:
            checkups = await self.checkup_repo.get_by_patient_id(query.patientId)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list medical checkups by patient") from e

        return [MedicalCheckupResponse.model_validate(c) for c in checkups]

    async def update_medical_checkup(self, checkup_data: MedicalCheckupUpdate) -> MedicalCheckupResponse:
        """Update only the fields present in the input"""
        changes = checkup_data.changes()
        try:
            checkup = await self.checkup_repo.update(checkup_data.id, changes)
        except SQLAlchemyError as e:
            raise handle_patient_reference_error(
                e, changes.get("patient_id"), "Medical checkup update"
            ) from e

        if checkup is None:
            logger.error(f"Medical checkup update failed: no checkup with id {checkup_data.id}")
            raise NotFoundError(
                message=f"Medical checkup with id {checkup_data.id} not found",
                details={"id": checkup_data.id},
                error_code="MEDICAL_CHECKUP_NOT_FOUND"
            )

        return MedicalCheckupResponse.model_validate(checkup)

    async def count_medical_checkups(self) -> int:
        try:
            return await self.checkup_repo.count()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "count medical checkups") from e
