import os

os.environ["SQL_DATABASE_URL"] = "sqlite://"
os.environ["MESSAGE_LANGUAGE"] = "en"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_records.db.base import get_db
from clinic_records.main import app
from clinic_records.models import Base
from clinic_records.repository.repo_user import UserRepository

engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_repo(db_session):
    return UserRepository(db_session)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_patient(client):
    def _create(**fields):
        payload = {"fullName": "Nguyen Van A", "birthday": "1990-01-01", "phone": "0911111111"}
        payload.update(fields)
        response = client.post("/api/users/patients", json=payload)
        assert response.status_code == 202, response.json()
        return response.json()["data"]["user"]
    return _create


@pytest.fixture
def create_employee(client):
    def _create(**fields):
        payload = {"username": "doctor.minh", "email": "minh@clinic.vn", "phone": "0922222222", "userType": "doctor"}
        payload.update(fields)
        response = client.post("/api/users/employees", json=payload)
        assert response.status_code == 202, response.json()
        return response.json()["data"]["user"]
    return _create
