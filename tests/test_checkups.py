import asyncio
import json
from datetime import date, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from clinic.core.exceptions import NotFoundError, PatientReferenceError
from clinic.domain.checkups.models import CheckupType
from clinic.domain.checkups.service import MedicalCheckupService
from clinic.api.v1.checkups.schemas import MedicalCheckupCreate, MedicalCheckupUpdate


@pytest.mark.records
@pytest.mark.integration
class TestMedicalCheckupProcedures:
    """Test the medical checkup RPC procedures."""

    async def test_create_medical_checkup_success(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict
    ) -> None:
        """Test logging a checkup; decimals come back at declared precision."""
        sample_checkup_data["patient_id"] = patient["id"]

        response = await client.post("/rpc/createMedicalCheckup", json=sample_checkup_data)

        assert response.status_code == 201
        data = response.json()
        for field, value in sample_checkup_data.items():
            assert data[field] == value
        assert data["temperature"] == 36.5
        assert data["height"] == 158.25

    async def test_create_medical_checkup_minimal(self, client: AsyncClient, patient: dict) -> None:
        """Test that every vital sign is optional."""
        response = await client.post("/rpc/createMedicalCheckup", json={
            "patient_id": patient["id"],
            "checkup_date": "2024-05-01",
            "checkup_type": "routine",
            "doctor_name": "Dr. Sari"
        })

        assert response.status_code == 201
        data = response.json()
        for field in ("weight", "height", "temperature", "heart_rate", "next_checkup_date"):
            assert data[field] is None

    @pytest.mark.parametrize("field,value", [
        ("weight", 0),
        ("height", -1),
        ("heart_rate", 0),
        ("heart_rate", 72.5),
        ("checkup_type", "annual"),
        ("doctor_name", ""),
    ])
    async def test_create_medical_checkup_rejects_invalid_input(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict,
        field: str,
        value
    ) -> None:
        sample_checkup_data["patient_id"] = patient["id"]
        sample_checkup_data[field] = value

        response = await client.post("/rpc/createMedicalCheckup", json=sample_checkup_data)

        assert response.status_code == 422
        assert field in response.json()["validation_errors"]

    @pytest.mark.parametrize("field,value", [
        ("weight", float("inf")),
        ("height", float("nan")),
        ("temperature", float("nan")),
        ("temperature", float("-inf")),
        ("weight", 1000),
        ("height", 999.995),
        ("temperature", 1000),
        ("temperature", -999.95),
    ])
    async def test_create_medical_checkup_rejects_unstorable_vitals(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict,
        field: str,
        value: float
    ) -> None:
        """Test that non-finite or oversized vitals are rejected before storage."""
        sample_checkup_data["patient_id"] = patient["id"]
        sample_checkup_data[field] = value

        response = await client.post(
            "/rpc/createMedicalCheckup",
            content=json.dumps(sample_checkup_data),
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert field in response.json()["validation_errors"]
        assert (await client.get("/rpc/getMedicalCheckups")).json() == []

    @pytest.mark.parametrize("field,value", [
        ("weight", float("inf")),
        ("temperature", float("nan")),
        ("height", 1000),
    ])
    async def test_update_medical_checkup_rejects_unstorable_vitals(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict,
        field: str,
        value: float
    ) -> None:
        checkup = (await client.post(
            "/rpc/createMedicalCheckup", json={**sample_checkup_data, "patient_id": patient["id"]}
        )).json()

        response = await client.post(
            "/rpc/updateMedicalCheckup",
            content=json.dumps({"id": checkup["id"], field: value}),
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        stored = (await client.get("/rpc/getMedicalCheckups")).json()[0]
        assert stored[field] == checkup[field]

    async def test_vitals_at_column_limits(self, client: AsyncClient, patient: dict) -> None:
        response = await client.post("/rpc/createMedicalCheckup", json={
            "patient_id": patient["id"],
            "checkup_date": "2024-05-01",
            "checkup_type": "adult",
            "doctor_name": "Dr. Sari",
            "weight": 999.99,
            "temperature": -999.9
        })

        assert response.status_code == 201
        assert response.json()["weight"] == 999.99
        assert response.json()["temperature"] == -999.9

    async def test_create_medical_checkup_unknown_patient(
        self,
        client: AsyncClient,
        sample_checkup_data: dict
    ) -> None:
        sample_checkup_data["patient_id"] = 99999

        response = await client.post("/rpc/createMedicalCheckup", json=sample_checkup_data)

        assert response.status_code == 404
        assert response.json()["message"] == "Patient with id 99999 not found"

    async def test_get_medical_checkups_by_patient_newest_first(
        self,
        client: AsyncClient,
        sample_patient_data: dict,
        sample_checkup_data: dict
    ) -> None:
        """Test that a patient's checkups come back by checkup_date descending."""
        first = (await client.post("/rpc/createPatient", json=sample_patient_data)).json()
        second = (await client.post(
            "/rpc/createPatient", json={**sample_patient_data, "name": "Lestari"}
        )).json()

        for checkup_date in ("2024-01-30", "2024-03-01", "2024-02-15"):
            await client.post(
                "/rpc/createMedicalCheckup",
                json={**sample_checkup_data, "patient_id": first["id"], "checkup_date": checkup_date}
            )
        await client.post(
            "/rpc/createMedicalCheckup",
            json={**sample_checkup_data, "patient_id": second["id"], "checkup_date": "2024-04-01"}
        )

        response = await client.get("/rpc/getMedicalCheckupsByPatient", params={"patientId": first["id"]})

        assert response.status_code == 200
        assert [c["checkup_date"] for c in response.json()] == ["2024-03-01", "2024-02-15", "2024-01-30"]

        everything = await client.get("/rpc/getMedicalCheckups")
        assert len(everything.json()) == 4

    async def test_update_medical_checkup_partial(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict
    ) -> None:
        sample_checkup_data["patient_id"] = patient["id"]
        checkup = (await client.post("/rpc/createMedicalCheckup", json=sample_checkup_data)).json()
        await asyncio.sleep(0.01)

        response = await client.post("/rpc/updateMedicalCheckup", json={
            "id": checkup["id"],
            "diagnosis": "Anaemia",
            "temperature": 37.25,
            "medication_prescribed": None
        })

        assert response.status_code == 200
        data = response.json()
        assert data["diagnosis"] == "Anaemia"
        assert data["temperature"] == 37.3
        assert data["medication_prescribed"] is None
        assert data["weight"] == checkup["weight"]
        assert data["symptoms"] == checkup["symptoms"]
        assert data["created_at"] == checkup["created_at"]
        assert datetime.fromisoformat(data["updated_at"]) > datetime.fromisoformat(checkup["updated_at"])

    async def test_update_medical_checkup_repoint_patient(
        self,
        client: AsyncClient,
        sample_patient_data: dict,
        sample_checkup_data: dict
    ) -> None:
        first = (await client.post("/rpc/createPatient", json=sample_patient_data)).json()
        second = (await client.post(
            "/rpc/createPatient", json={**sample_patient_data, "name": "Lestari"}
        )).json()
        checkup = (await client.post(
            "/rpc/createMedicalCheckup", json={**sample_checkup_data, "patient_id": first["id"]}
        )).json()

        response = await client.post(
            "/rpc/updateMedicalCheckup",
            json={"id": checkup["id"], "patient_id": second["id"]}
        )

        assert response.status_code == 200
        assert response.json()["patient_id"] == second["id"]

    async def test_update_medical_checkup_unknown_patient(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict
    ) -> None:
        checkup = (await client.post(
            "/rpc/createMedicalCheckup", json={**sample_checkup_data, "patient_id": patient["id"]}
        )).json()

        response = await client.post(
            "/rpc/updateMedicalCheckup",
            json={"id": checkup["id"], "patient_id": 99999}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "PATIENT_NOT_FOUND"

    async def test_update_medical_checkup_null_doctor(
        self,
        client: AsyncClient,
        patient: dict,
        sample_checkup_data: dict
    ) -> None:
        checkup = (await client.post(
            "/rpc/createMedicalCheckup", json={**sample_checkup_data, "patient_id": patient["id"]}
        )).json()

        response = await client.post(
            "/rpc/updateMedicalCheckup",
            json={"id": checkup["id"], "doctor_name": None}
        )

        assert response.status_code == 422

    async def test_update_medical_checkup_not_found(self, client: AsyncClient) -> None:
        response = await client.post(
            "/rpc/updateMedicalCheckup",
            json={"id": 999999, "diagnosis": "n/a"}
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "MEDICAL_CHECKUP_NOT_FOUND"

    async def test_checkup_lists_empty(self, client: AsyncClient) -> None:
        assert (await client.get("/rpc/getMedicalCheckups")).json() == []
        assert (await client.get("/rpc/getMedicalCheckupsByPatient", params={"patientId": 1})).json() == []


@pytest.mark.records
@pytest.mark.unit
class TestMedicalCheckupService:
    """Test MedicalCheckupService directly."""

    async def test_create_unknown_patient_raises(self, db_session: AsyncSession) -> None:
        checkup = MedicalCheckupCreate(
            patient_id=99999,
            checkup_date=date(2024, 1, 30),
            checkup_type=CheckupType.ADULT,
            doctor_name="Dr. Sari"
        )

        with pytest.raises(PatientReferenceError):
            await MedicalCheckupService(db_session).create_medical_checkup(checkup)

        assert await MedicalCheckupService(db_session).count_medical_checkups() == 0

    async def test_update_missing_checkup_raises(self, db_session: AsyncSession) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await MedicalCheckupService(db_session).update_medical_checkup(
                MedicalCheckupUpdate(id=999999, notes="none")
            )

        assert exc_info.value.message == "Medical checkup with id 999999 not found"
