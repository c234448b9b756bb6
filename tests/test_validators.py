import pytest

from alphasafe.application.validators import (
    validate_client,
    validate_intervention,
    validate_photo,
    validate_registration,
    validate_technician,
    validate_user,
)
from alphasafe.core.exceptions import ValidationException
from alphasafe.domain.enums import InterventionStatus, ServiceType, TechnicianStatus


def test_client_requires_nine_character_nif():
    with pytest.raises(ValidationException) as exc:
        validate_client({"name": "Loja", "nif": "12345"})
    assert exc.value.field == "nif"
    assert exc.value.status_code == 400

    client = validate_client({"name": "  Loja  ", "nif": " 123456789 ", "email": " LOJA@Example.PT "})
    assert client.name == "Loja"
    assert client.nif == "123456789"
    assert client.email == "LOJA@Example.PT"


def test_client_blank_name_is_rejected():
    with pytest.raises(ValidationException) as exc:
        validate_client({"name": "   ", "nif": "123456789"})
    assert exc.value.field == "name"
    assert exc.value.message == "Nome é obrigatório"


def test_client_invalid_email_is_rejected():
    with pytest.raises(ValidationException) as exc:
        validate_client({"name": "Loja", "nif": "123456789", "email": "not-an-email"})
    assert exc.value.field == "email"


def test_partial_update_validates_only_present_fields():
    update = validate_client({"phone": "912345678"}, partial=True)
    assert update.model_fields_set == {"phone"}

    with pytest.raises(ValidationException):
        validate_client({"name": None}, partial=True)


def test_intervention_normalizes_services_and_legacy_labels():
    intervention = validate_intervention(
        {
            "clientId": 3,
            "serviceType": ["Alarme", "Alarm", "Video Surveillance"],
            "equipmentModel": "AX",
            "serialNumber": "1",
            "technician": "Ana",
            "status": "Assistência",
        }
    )
    assert intervention.service_type == [ServiceType.ALARM, ServiceType.VIDEO_SURVEILLANCE]
    assert intervention.status == InterventionStatus.ASSISTANCE


def test_intervention_defaults_to_in_progress():
    intervention = validate_intervention(
        {"client_id": 1, "service_type": ["Alarm"], "equipment_model": "AX", "serial_number": "1", "technician": "Ana"}
    )
    assert intervention.status == InterventionStatus.IN_PROGRESS


@pytest.mark.parametrize(
    "override",
    [
        {"serviceType": []},
        {"serviceType": ["Plumbing"]},
        {"clientId": 0},
        {"technician": " "},
        {"status": "Archived"},
        {"assistanceDate": "yesterday-ish"},
    ],
)
def test_intervention_rejections(override):
    payload = {
        "clientId": 1,
        "serviceType": ["Alarm"],
        "equipmentModel": "AX",
        "serialNumber": "1",
        "technician": "Ana",
    }
    payload.update(override)
    with pytest.raises(ValidationException):
        validate_intervention(payload)


def test_photo_url_must_be_data_or_http():
    assert validate_photo({"url": "data:image/png;base64,AAAA"}).url.startswith("data:image/")
    assert validate_photo({"url": "https://cdn.example.com/a.jpg"}).url == "https://cdn.example.com/a.jpg"
    with pytest.raises(ValidationException):
        validate_photo({"url": "ftp://example.com/a.jpg"})


def test_technician_accepts_dates_whatever_the_status():
    technician = validate_technician({"name": "Rui", "active": "Active", "vacationStart": "2024-01-01", "email": ""})
    assert technician.active == TechnicianStatus.ACTIVE
    assert technician.vacation_start is not None
    assert technician.email is None


def test_technician_role_must_be_known():
    with pytest.raises(ValidationException) as exc:
        validate_technician({"name": "Rui", "role": "manager"})
    assert exc.value.field == "role"


def test_registration_password_minimum_length():
    with pytest.raises(ValidationException) as exc:
        validate_registration({"email": "a@b.pt", "password": "short", "firstName": "A", "lastName": "B"})
    assert exc.value.field == "password"
    assert "8" in exc.value.message


def test_admin_created_user_accepts_short_password():
    user = validate_user({"email": "X@B.PT", "password": "x", "firstName": "A", "lastName": "B", "role": "admin"})
    assert user.email == "x@b.pt"
    assert user.role.value == "admin"


def test_non_mapping_payload_is_rejected():
    with pytest.raises(ValidationException):
        validate_client(["not", "a", "dict"])
