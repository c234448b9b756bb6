from datetime import date

import pytest

from alphasafe.core.exceptions import EntityNotFoundException


def test_create_applies_defaults(technician_service):
    technician = technician_service.create({"name": "Rui Costa"})

    assert technician.role == "technician"
    assert technician.active == "Active"
    assert technician.receive_assignment_notifications is True
    assert technician.receive_billing_notifications is False
    assert technician.receive_assistance_notifications is True
    assert technician.created_at is not None


def test_get_by_name_is_exact_and_may_return_many(technician_service):
    technician_service.create({"name": "Rui Costa"})
    technician_service.create({"name": "Rui Costa", "email": "rui2@alphasafe.pt"})
    technician_service.create({"name": "Rui"})

    assert len(technician_service.get_by_name("Rui Costa")) == 2
    assert technician_service.get_by_name("rui costa") == []
    assert technician_service.get_by_name("Ninguém") == []


def test_list_is_newest_first(technician_service):
    first = technician_service.create({"name": "A"})
    second = technician_service.create({"name": "B"})
    assert [t.id for t in technician_service.list()] == [second.id, first.id]


def test_update_and_delete(technician_service):
    technician = technician_service.create({"name": "Rui"})
    updated = technician_service.update(technician.id, {"active": "Baixa", "sickLeaveStart": "2024-04-01"})
    assert updated.active == "Sick Leave"
    assert updated.name == "Rui"

    technician_service.delete(technician.id)
    with pytest.raises(EntityNotFoundException):
        technician_service.get(technician.id)


def test_list_with_availability(technician_service):
    technician_service.create({"name": "Disponível"})
    technician_service.create(
        {"name": "De férias", "active": "Vacation", "vacationStart": "2024-07-01", "vacationEnd": "2024-07-15"}
    )

    by_name = {t.name: t for t in technician_service.list_with_availability(date(2024, 7, 15))}

    assert by_name["Disponível"].available is True
    assert by_name["De férias"].available is False
    assert by_name["De férias"].unavailable_reason == "Vacation"
