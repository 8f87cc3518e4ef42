from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from clinic.core.config import Settings
from clinic.core.coercion import to_decimal, to_float
from clinic.domain.immunizations.repository import ImmunizationRepository
from clinic.core.exceptions import (
    DatabaseError,
    PatientReferenceError,
    create_error_response,
    group_validation_errors,
    handle_patient_reference_error,
)


@pytest.mark.unit
class TestSettings:
    """Test settings assembly."""

    def test_defaults_to_sqlite(self) -> None:
        settings = Settings(_env_file=None, DATABASE_URL=None)

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./clinic.db"
        assert settings.SERVER_PORT == 2022
        assert settings.RPC_PREFIX == "/rpc"

    def test_assembles_postgres_url(self) -> None:
        settings = Settings(
            _env_file=None,
            DATABASE_URL=None,
            POSTGRES_USER="clinic",
            POSTGRES_PASSWORD="secret",
            POSTGRES_SERVER="db",
            POSTGRES_DB="records"
        )

        assert settings.DATABASE_URL == "postgresql+asyncpg://clinic:secret@db:5432/records"

    def test_rewrites_plain_postgres_url(self) -> None:
        settings = Settings(_env_file=None, DATABASE_URL="postgresql://u:p@host/db?sslmode=require")

        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@host/db?ssl=require"

    def test_cors_origins_from_comma_list(self) -> None:
        settings = Settings(_env_file=None, BACKEND_CORS_ORIGINS="http://localhost:3000, http://clinic.local")

        assert len(settings.BACKEND_CORS_ORIGINS) == 2


@pytest.mark.unit
class TestCoercion:
    """Test decimal handling."""

    def test_to_decimal_keeps_exact_value(self) -> None:
        assert to_decimal(4.25, 2) == Decimal("4.25")
        assert to_decimal(36.5, 1) == Decimal("36.5")

    def test_to_decimal_rounds_half_up(self) -> None:
        assert to_decimal(3.455, 2) == Decimal("3.46")
        assert to_decimal(37.25, 1) == Decimal("37.3")

    def test_none_passes_through(self) -> None:
        assert to_decimal(None, 2) is None
        assert to_float(None) is None
        assert to_float(Decimal("4.25")) == 4.25


@pytest.mark.unit
class TestErrors:
    """Test error mapping and rendering."""

    def test_foreign_key_violation_maps_to_patient_reference(self) -> None:
        error = Exception("FOREIGN KEY constraint failed")

        mapped = handle_patient_reference_error(error, 7, "Immunization creation")

        assert isinstance(mapped, PatientReferenceError)
        assert mapped.message == "Patient with id 7 not found"

    def test_other_failures_map_to_database_error(self) -> None:
        mapped = handle_patient_reference_error(Exception("disk I/O error"), 7, "Immunization creation")

        assert isinstance(mapped, DatabaseError)
        assert mapped.status_code == 500

    def test_error_response_shape(self) -> None:
        response = create_error_response(PatientReferenceError(3))

        assert response["error_code"] == "PATIENT_NOT_FOUND"
        assert response["details"] == {"patient_id": 3}
        assert response["timestamp"]

    def test_group_validation_errors(self) -> None:
        grouped = group_validation_errors([
            {"loc": ("body", "name"), "msg": "too short"},
            {"loc": ("body", "name"), "msg": "required"},
            {"loc": ("query", "id"), "msg": "not an int"},
        ])

        assert grouped == {"name": ["too short", "required"], "id": ["not an int"]}


@pytest.mark.integration
class TestServiceProcedures:
    """Test the health and statistics procedures."""

    async def test_healthcheck(self, client: AsyncClient) -> None:
        response = await client.get("/rpc/healthcheck")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    async def test_statistics(
        self,
        client: AsyncClient,
        patient: dict,
        sample_immunization_data: dict
    ) -> None:
        await client.post(
            "/rpc/createImmunization",
            json={**sample_immunization_data, "patient_id": patient["id"]}
        )

        response = await client.get("/rpc/getStatistics")

        assert response.status_code == 200
        assert response.json() == {
            "patients": 1,
            "delivery_services": 0,
            "immunizations": 1,
            "medical_checkups": 0
        }

    async def test_openapi_documents_error_shapes(self, client: AsyncClient) -> None:
        response = await client.get("/rpc/openapi.json")

        assert response.status_code == 200
        schemas = response.json()["components"]["schemas"]
        assert "ErrorResponse" in schemas
        assert "/rpc/createPatient" in response.json()["paths"]

    async def test_statistics_database_failure(self, client: AsyncClient, monkeypatch) -> None:
        """Test that a failing count surfaces as a DatabaseError response."""

        async def failing_count(self):
            raise OperationalError("SELECT count(id) FROM immunizations", {}, Exception("database is locked"))

        monkeypatch.setattr(ImmunizationRepository, "count", failing_count)

        response = await client.get("/rpc/getStatistics")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "DATABASE_OPERATION_ERROR"
        assert data["details"]["operation"] == "count immunizations"
