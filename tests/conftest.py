import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from grooming_api.config import Settings
from grooming_api.db import init_db
from grooming_api.main import create_app
from grooming_api.schemas import AppointmentCreate

ADMIN_EMAIL = "admin@toelettatura.com"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        environment="test",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def engine():
    # one shared connection so every thread sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine, settings):
    init_db(engine, settings)
    with Session(engine) as session:
        yield session


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    # entering the context runs startup, which seeds the store
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_token(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def booking_request():
    return AppointmentCreate(
        clientName="Mario Rossi",
        clientPhone="3331234567",
        petName="Fido",
        petBreed="Labrador",
        serviceId=1,
        appointmentDate="2024-06-01",
        appointmentTime="10:00",
        notes="Molto vivace",
    )
