from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import logging

from clinic.core.exceptions import handle_database_error, handle_patient_reference_error
from clinic.domain.deliveries.repository import DeliveryServiceRepository
from clinic.api.v1.common import GetByPatientIdInput
from clinic.api.v1.deliveries.schemas import DeliveryServiceCreate, DeliveryServiceResponse

logger = logging.getLogger(__name__)


class DeliveryServiceService:
    """Service layer for delivery (birth) records"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.delivery_repo = DeliveryServiceRepository(db)

    async def create_delivery_service(self, delivery_data: DeliveryServiceCreate) -> DeliveryServiceResponse:
        """Record a delivery for an existing patient"""
        try:
            delivery = await self.delivery_repo.create(delivery_data.model_dump())
        except SQLAlchemyError as e:
            raise handle_patient_reference_error(
                e, delivery_data.patient_id, "Delivery service creation"
            ) from e

        logger.info(f"Recorded delivery {delivery.id} for patient {delivery.patient_id}")
        return DeliveryServiceResponse.model_validate(delivery)

    async def get_delivery_services(self) -> List[DeliveryServiceResponse]:
        try:
            deliveries = await self.delivery_repo.get_all()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list delivery services") from e

        return [DeliveryServiceResponse.model_validate(d) for d in deliveries]

    async def get_delivery_services_by_patient(self, query: GetByPatientIdInput) -> List[DeliveryServiceResponse]:
        try:
            deliveries = await self.delivery_repo.get_by_patient_id(query.patientId)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list delivery services by patient") from e

        return [DeliveryServiceResponse.model_validate(d) for d in deliveries]

    async def count_delivery_services(self) -> int:
        try:
            return await self.delivery_repo.count()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "count delivery services") from e
