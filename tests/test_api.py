import pytest
from fastapi.testclient import TestClient

from alphasafe.application.services.auth_service import create_access_token
from alphasafe.application.services.user_service import UserService
from alphasafe.infrastructure.database import get_db
from alphasafe.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from alphasafe.interfaces.deps import get_notifier
from alphasafe.main import app
from conftest import RecordingNotifier, intervention_payload

ADMIN = {"email": "admin@alphasafe.pt", "password": "admin-pass"}
TECH = {"email": "tecnico@alphasafe.pt", "password": "tecnico-pass"}


@pytest.fixture
def api(session_factory, settings):
    notifier = RecordingNotifier()

    def override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    db = session_factory()
    try:
        users = UserService(SQLAlchemyUserRepository(db), settings)
        users.create({**ADMIN, "firstName": "Admin", "lastName": "AlphaSafe", "role": "admin"})
        users.create({**TECH, "firstName": "Tó", "lastName": "Técnico", "role": "technician"})
    finally:
        db.close()

    client = TestClient(app)
    client.notifier = notifier
    yield client
    app.dependency_overrides.clear()


def login(api, credentials):
    response = api.post("/api/auth/login", json=credentials)
    assert response.status_code == 200
    return response


def test_health_is_public(api):
    assert api.get("/health").json()["status"] == "healthy"


def test_protected_routes_require_a_session(api):
    response = api.get("/api/clients")
    assert response.status_code == 401
    assert response.json()["error"]["kind"] == "unauthorized"


def test_login_sets_cookie_and_returns_user_without_password(api):
    response = login(api, ADMIN)
    body = response.json()

    assert "auth_token" in response.cookies
    assert body["user"]["email"] == ADMIN["email"]
    assert "password" not in body["user"]
    assert "passwordHash" not in body["user"]

    me = api.get("/api/auth/user").json()
    assert me["role"] == "admin"
    assert me["firstName"] == "Admin"


def test_bearer_token_is_accepted(api):
    token = login(api, TECH).json()["accessToken"]
    api.cookies.clear()

    response = api.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == TECH["email"]


@pytest.mark.parametrize("stale_cookie", ["not-a-jwt", create_access_token(9999)])
def test_bearer_token_is_used_when_the_cookie_is_stale(api, stale_cookie):
    token = login(api, TECH).json()["accessToken"]
    api.cookies.clear()
    api.cookies.set("auth_token", stale_cookie)

    response = api.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == TECH["email"]


def test_stale_cookie_alone_is_unauthorized(api):
    api.cookies.set("auth_token", "not-a-jwt")
    assert api.get("/api/auth/user").status_code == 401


def test_bad_credentials(api):
    response = api.post("/api/auth/login", json={"email": ADMIN["email"], "password": "wrong"})
    assert response.status_code == 401


def test_logout_clears_session(api):
    login(api, ADMIN)
    response = api.post("/api/auth/logout")
    assert response.status_code == 200
    assert "auth_token=" in response.headers["set-cookie"]
    assert "Max-Age=0" in response.headers["set-cookie"]
    api.cookies.clear()
    assert api.get("/api/auth/user").status_code == 401


def test_register_then_duplicate(api):
    payload = {"email": "nova@alphasafe.pt", "password": "palavra-passe", "firstName": "Nova", "lastName": "Pessoa"}

    created = api.post("/api/auth/register", json=payload)
    assert created.status_code == 201
    assert created.json()["role"] == "technician"

    duplicate = api.post("/api/auth/register", json=payload)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["field"] == "email"


def test_validation_errors_use_the_error_envelope(api):
    login(api, TECH)
    response = api.post("/api/clients", json={"name": "Loja", "nif": "123"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["kind"] == "validation"
    assert error["field"] == "nif"
    assert error["path"] == "/api/clients"


def test_client_and_intervention_flow(api):
    login(api, TECH)

    client = api.post("/api/clients", json={"name": "Farmácia Lopes", "nif": "500100200"}).json()
    assert api.get(f"/api/clients/{client['id']}").json()["name"] == "Farmácia Lopes"
    assert [c["id"] for c in api.get("/api/clients", params={"search": "lopes"}).json()] == [client["id"]]

    created = api.post("/api/interventions", json=intervention_payload(client["id"]))
    assert created.status_code == 201
    intervention = created.json()
    assert intervention["client"]["nif"] == "500100200"
    assert intervention["serviceType"] == ["Alarm"]

    patched = api.patch(f"/api/interventions/{intervention['id']}", json={"status": "Completed"}).json()
    assert patched["status"] == "Completed"
    assert patched["serialNumber"] == "SN-001"

    photo = api.post(f"/api/interventions/{intervention['id']}/photos", json={"url": "https://cdn.example.com/1.jpg"})
    assert photo.status_code == 201
    assert api.delete(f"/api/photos/{photo.json()['id']}").status_code == 204
    assert api.delete(f"/api/photos/{photo.json()['id']}").status_code == 404

    listed = api.get("/api/interventions", params={"status": "Completed", "clientId": client["id"]}).json()
    assert [i["id"] for i in listed] == [intervention["id"]]

    stats = api.get("/api/interventions/stats").json()
    assert stats["total"] == 1
    assert stats["byStatus"]["Completed"] == 1

    assert api.delete(f"/api/clients/{client['id']}").status_code == 409
    assert api.delete(f"/api/interventions/{intervention['id']}").status_code == 204
    assert api.get(f"/api/interventions/{intervention['id']}").status_code == 404


def test_unknown_client_on_intervention_is_not_found(api):
    login(api, TECH)
    response = api.post("/api/interventions", json=intervention_payload(999))
    assert response.status_code == 404


def test_technician_writes_are_admin_only(api):
    login(api, TECH)
    assert api.get("/api/technicians").status_code == 200
    forbidden = api.post("/api/technicians", json={"name": "Rui"})
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["kind"] == "forbidden"

    login(api, ADMIN)
    created = api.post("/api/technicians", json={"name": "Rui", "email": "rui@alphasafe.pt"})
    assert created.status_code == 201
    technician_id = created.json()["id"]
    assert api.patch(f"/api/technicians/{technician_id}", json={"active": "Inactive"}).json()["active"] == "Inactive"

    availability = api.get("/api/technicians/availability").json()
    assert availability[0]["available"] is False
    assert availability[0]["unavailableReason"] == "Inactive"

    assert api.delete(f"/api/technicians/{technician_id}").status_code == 204


def test_assignment_notification_is_handed_to_the_notifier(api):
    login(api, ADMIN)
    api.post("/api/technicians", json={"name": "João Silva", "email": "joao@alphasafe.pt"})
    client = api.post("/api/clients", json={"name": "Loja", "nif": "123456789"}).json()

    api.post("/api/interventions", json=intervention_payload(client["id"], status="Assistance"))

    assert [(r.recipient, r.kind.value) for r in api.notifier.requests] == [("joao@alphasafe.pt", "assistance")]


def test_user_administration_is_admin_only(api):
    login(api, TECH)
    assert api.get("/api/users").status_code == 403

    login(api, ADMIN)
    users = api.get("/api/users").json()
    assert {u["email"] for u in users} == {ADMIN["email"], TECH["email"]}
    assert all("password" not in u and "passwordHash" not in u for u in users)

    created = api.post(
        "/api/users",
        json={"email": "novo@alphasafe.pt", "password": "x", "firstName": "N", "lastName": "O"},
    )
    assert created.status_code == 201
    assert api.delete(f"/api/users/{created.json()['id']}").status_code == 204


def test_notification_log_is_admin_only(api):
    login(api, TECH)
    assert api.get("/api/notifications").status_code == 403

    login(api, ADMIN)
    body = api.get("/api/notifications").json()
    assert body["total"] == 0
    assert body["items"] == []
