import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic.main import app
from clinic.infrastructure.database import build_engine, init_db, get_db, Base


# Test database URL: one private in-memory SQLite database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh schema for each test."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_db(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with database dependency override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def sample_patient_data() -> dict:
    """Sample patient data for testing."""
    return {
        "name": "Siti Rahayu",
        "date_of_birth": "1992-04-17",
        "gender": "female",
        "phone": "+6281234567890",
        "address": "Jl. Merdeka 12, Bandung"
    }


@pytest.fixture(scope="function")
def sample_delivery_data() -> dict:
    """Sample delivery data; patient_id is filled in by the test."""
    return {
        "delivery_date": "2024-02-10",
        "delivery_type": "normal",
        "baby_weight": 4.25,
        "baby_gender": "male",
        "baby_name": "Budi",
        "complications": None,
        "doctor_name": "Dr. Hartono",
        "notes": "Mother and baby healthy"
    }


@pytest.fixture(scope="function")
def sample_immunization_data() -> dict:
    """Sample immunization data; patient_id is filled in by the test."""
    return {
        "vaccine_name": "Hepatitis B",
        "vaccine_type": "basic",
        "vaccination_date": "2024-02-11",
        "next_vaccination_date": "2024-03-11",
        "batch_number": "HB-2024-001",
        "administered_by": "Nurse Dewi"
    }


@pytest.fixture(scope="function")
def sample_checkup_data() -> dict:
    """Sample checkup data; patient_id is filled in by the test."""
    return {
        "checkup_date": "2024-01-30",
        "checkup_type": "pregnancy",
        "weight": 62.5,
        "height": 158.25,
        "blood_pressure": "120/80",
        "temperature": 36.5,
        "heart_rate": 78,
        "symptoms": "Mild nausea",
        "diagnosis": "Normal pregnancy, week 20",
        "treatment": None,
        "medication_prescribed": "Folic acid",
        "doctor_name": "Dr. Hartono",
        "next_checkup_date": "2024-02-27"
    }


@pytest.fixture(scope="function")
async def patient(client: AsyncClient, sample_patient_data: dict) -> dict:
    """A registered patient, as returned by createPatient."""
    response = await client.post("/rpc/createPatient", json=sample_patient_data)
    assert response.status_code == 201
    return response.json()


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: fast tests against services and helpers")
    config.addinivalue_line("markers", "integration: tests through the HTTP app")
    config.addinivalue_line("markers", "patients: patient registry")
    config.addinivalue_line("markers", "records: clinical event records")
    config.addinivalue_line("markers", "ui: server-rendered pages")
