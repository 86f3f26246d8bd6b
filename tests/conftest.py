import asyncio
import os
import tempfile

# Point the application engine at a throwaway SQLite file before it is imported
_DB_DIR = tempfile.mkdtemp(prefix="gradebook-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/app.db"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gradebook.database import Base, get_db
from gradebook.main import app
from gradebook.services.report_store import ReportStore


@pytest.fixture
def client(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.report_store = ReportStore()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture
def student_payload():
    def _payload(admission_number="STD001", full_name="John Doe", class_name="JHS 1",
                 academic_year="2024/2025", **extra):
        payload = {
            "full_name": full_name,
            "gender": "Male",
            "admission_number": admission_number,
            "admission_date": "2024-09-02",
            "academic_year": academic_year,
            "class_name": class_name,
            "term": "1st Term",
            "home_address": "12 Ring Road, Accra",
            "guardian_name": "Mary Doe",
            "guardian_relationship": "Mother",
            "guardian_phone": "0241234567",
        }
        payload.update(extra)
        return payload

    return _payload


@pytest.fixture
def make_student(client, student_payload):
    def _make(admission_number="STD001", **extra):
        payload = student_payload(admission_number, **extra)
        response = client.post("/api/students", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
