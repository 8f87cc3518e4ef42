from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from clinic.core.exceptions import handle_database_error, handle_patient_reference_error
from clinic.domain.immunizations.repository import ImmunizationRepository
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.immunizations.schemas import ImmunizationCreate, ImmunizationResponse

logger = logging.getLogger(__name__)


class ImmunizationService:
    """Service layer for immunization tracking"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.immunization_repo = ImmunizationRepository(db)

    async def create_immunization(self, immunization_data: ImmunizationCreate) -> ImmunizationResponse:
        """Record a vaccination for an existing patient"""
        try:
            immunization = await self.immunization_repo.create(immunization_data.model_dump())
        except SQLAlchemyError as e:
            raise handle_patient_reference_error(
                e, immunization_data.patient_id, "Immunization creation"
            ) from e

        logger.info(
            f"Recorded immunization {immunization.id} ({immunization.vaccine_name}) "
            f"for patient {immunization.patient_id}"
        )
        return ImmunizationResponse.model_validate(immunization)

    async def get_immunizations(self) -> List[ImmunizationResponse]:
        try:
            immunizations = await self.immunization_repo.get_all()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list immunizations") from e

        return [ImmunizationResponse.model_validate(i) for i in immunizations]

    async def get_immunizations_by_patient(self, query: GetByPatientIdInput) -> List[ImmunizationResponse]:
        try:
            immunizations = await self.immunization_repo.get_by_patient_id(query.patientId)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list immunizations by patient") from e

        return [ImmunizationResponse.model_validate(i) for i in immunizations]

    async def count_immunizations(self) -> int:
        try:
            return await self.immunization_repo.count()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "count immunizations") from e
