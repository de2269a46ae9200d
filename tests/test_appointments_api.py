from datetime import datetime, timedelta, timezone
from decimal import Decimal

from grooming_api.auth import create_access_token

from .conftest import ADMIN_EMAIL, ADMIN_PASSWORD

def _parse_timestamp(value):
    # fromisoformat only accepts a trailing "Z" from Python 3.11
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


NEW_APPOINTMENT = {
    "clientName": "Mario Rossi",
    "petName": "Fido",
    "serviceId": 1,
    "appointmentDate": "2024-06-01",
    "appointmentTime": "10:00",
}


def test_list_services_public(client):
    response = client.get("/api/services")
    data = response.json()

    assert response.status_code == 200
    assert len(data) == 5
    assert [s["name"] for s in data] == sorted(s["name"] for s in data)
    bath = next(s for s in data if s["name"] == "Bagno e Spazzolatura")
    assert bath["duration"] == 60
    assert Decimal(str(bath["price"])) == Decimal("25.00")


def test_create_appointment_public_200(client):
    response = client.post("/api/appointments", json=NEW_APPOINTMENT)
    data = response.json()

    assert response.status_code == 200
    assert data["message"] == "Appuntamento creato con successo"
    assert data["appointment"]["status"] == "pending"
    assert data["appointment"]["client_name"] == "Mario Rossi"
    assert data["appointment"]["appointment_date"] == "2024-06-01"
    assert data["appointment"]["rejection_reason"] is None
    assert data["appointment"]["proposed_changes"] is None


def test_create_appointment_missing_fields_400(client, auth_headers):
    response = client.post("/api/appointments", json={"clientName": "Mario Rossi", "petName": "Fido"})

    assert response.status_code == 400
    assert response.json() == {"error": "Campi obbligatori mancanti"}
    assert client.get("/api/appointments", headers=auth_headers).json() == []


def test_create_appointment_wrong_type_400(client):
    response = client.post("/api/appointments", json={**NEW_APPOINTMENT, "serviceId": "uno"})

    assert response.status_code == 400
    assert response.json() == {"error": "Richiesta non valida"}


def test_list_appointments_requires_token_401(client):
    response = client.get("/api/appointments")

    assert response.status_code == 401
    assert response.json() == {"error": "Token di accesso richiesto"}


def test_list_appointments_invalid_token_403(client):
    response = client.get("/api/appointments", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 403
    assert response.json() == {"error": "Token non valido"}


def test_list_appointments_expired_token_403(client, settings):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = create_access_token({"userId": 1, "email": ADMIN_EMAIL}, settings.jwt_secret, now=issued)

    response = client.get("/api/appointments", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


def test_list_appointments_joined_with_service(client, auth_headers):
    client.post("/api/appointments", json=NEW_APPOINTMENT)
    client.post("/api/appointments", json={**NEW_APPOINTMENT, "petName": "Rex", "serviceId": 2})

    response = client.get("/api/appointments", headers=auth_headers)
    data = response.json()

    assert response.status_code == 200
    assert [a["pet_name"] for a in data] == ["Rex", "Fido"]
    assert data[0]["service_name"] == "Taglio Completo"
    assert data[0]["duration"] == 90
    assert Decimal(str(data[0]["price"])) == Decimal("40.00")


def test_update_status_requires_token(client):
    response = client.put("/api/appointments/1/status", json={"status": "confirmed"})
    assert response.status_code == 401

    response = client.put(
        "/api/appointments/1/status",
        json={"status": "confirmed"},
        headers={"Authorization": "Bearer bad.token.here"},
    )
    assert response.status_code == 403


def test_update_status_not_found_404(client, auth_headers):
    response = client.put("/api/appointments/999/status", json={"status": "confirmed"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Appuntamento non trovato"}


def test_update_status_invalid_status_400(client, auth_headers):
    created = client.post("/api/appointments", json=NEW_APPOINTMENT).json()["appointment"]

    response = client.put(
        f"/api/appointments/{created['id']}/status", json={"status": "archived"}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Stato non valido"}


def test_update_status_with_counter_proposal(client, auth_headers):
    created = client.post("/api/appointments", json=NEW_APPOINTMENT).json()["appointment"]
    changes = {"date": "2024-06-02", "time": "11:30", "notes": "Domenica chiusi"}

    response = client.put(
        f"/api/appointments/{created['id']}/status",
        json={"status": "modified", "proposedChanges": changes},
        headers=auth_headers,
    )
    data = response.json()

    assert response.status_code == 200
    assert data["status"] == "modified"
    assert data["proposed_changes"] == changes
    assert data["rejection_reason"] is None
    assert _parse_timestamp(data["updated_at"]) >= _parse_timestamp(created["updated_at"])
    # stored date/time are untouched by a counter-proposal
    assert data["appointment_date"] == "2024-06-01"


def test_update_status_rejection(client, auth_headers):
    created = client.post("/api/appointments", json=NEW_APPOINTMENT).json()["appointment"]

    response = client.put(
        f"/api/appointments/{created['id']}/status",
        json={"status": "rejected", "rejectionReason": "Nessun posto disponibile"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["rejection_reason"] == "Nessun posto disponibile"


def test_booking_flow_end_to_end(client):
    """Client books, admin logs in with the seeded account and confirms."""
    created = client.post("/api/appointments", json=NEW_APPOINTMENT)
    assert created.status_code == 200
    appointment = created.json()["appointment"]
    assert appointment["status"] == "pending"

    login = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    token = login.json()["token"]

    response = client.put(
        f"/api/appointments/{appointment['id']}/status",
        json={"status": "confirmed"},
        headers={"Authorization": f"Bearer {token}"},
    )
    data = response.json()

    assert response.status_code == 200
    assert data["status"] == "confirmed"
    assert data["rejection_reason"] is None


def test_wrong_password_end_to_end(client):
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"})

    assert response.status_code == 401
    assert response.json() == {"error": "Credenziali non valide"}


def test_update_status_timestamp_is_utc_instant(client, auth_headers):
    created = client.post("/api/appointments", json=NEW_APPOINTMENT).json()["appointment"]

    response = client.put(
        f"/api/appointments/{created['id']}/status", json={"status": "confirmed"}, headers=auth_headers
    )
    updated_at = _parse_timestamp(response.json()["updated_at"])

    assert updated_at.utcoffset() == timedelta(0)
    assert abs(datetime.now(timezone.utc) - updated_at) < timedelta(minutes=1)
    assert _parse_timestamp(created["created_at"]).utcoffset() == timedelta(0)


def test_non_bearer_credential_is_invalid_token_403(client):
    response = client.get("/api/appointments", headers={"Authorization": "Basic xyz"})

    assert response.status_code == 403
    assert response.json() == {"error": "Token non valido"}


def test_scheme_without_token_401(client):
    response = client.get("/api/appointments", headers={"Authorization": "Bearer"})

    assert response.status_code == 401
    assert response.json() == {"error": "Token di accesso richiesto"}
