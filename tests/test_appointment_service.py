"""Unit tests for AppointmentService: booking rules, edits and tracing."""

import logging

from tracebook.application import (
    AppointmentDeleted,
    AppointmentNotFound,
    AppointmentSaved,
    AppointmentService,
    ContactData,
    ContactService,
    Duplicate,
    Invalid,
    Overlapping,
    PersonNotFound,
    TraceResult,
)
from tracebook.domain import StorageError
from tracebook.infrastructure import AddressBook


def _setup():
    book = AddressBook()
    contacts = ContactService(book)
    p1 = contacts.add_contact(ContactData(name="Patient One", phone_number="+12025551111"))
    p2 = contacts.add_contact(ContactData(name="Patient Two", phone_number="+12025552222"))
    return book, AppointmentService(book), p1.person_id, p2.person_id


def test_add_appointment_saved() -> None:
    book, service, p1, _p2 = _setup()
    result = service.add_appointment(p1, "10/02/2024 11am-1pm")
    assert isinstance(result, AppointmentSaved)
    assert result.person_id == p1
    assert result.time == "10 Feb 2024, 11:00 - 13:00"
    assert book.get_appointment_by_id(result.appointment_id) is not None


def test_add_appointment_invalid_time_or_unknown_person() -> None:
    _book, service, p1, _p2 = _setup()
    invalid = service.add_appointment(p1, "10/02/2024 2pm-1pm")
    assert isinstance(invalid, Invalid)
    assert invalid.field == "appointment_time"
    assert isinstance(service.add_appointment("ghost", "10/02/2024 11am-1pm"), PersonNotFound)
    assert service.list_appointments() == []


def test_duplicate_overlapping_and_touching() -> None:
    _book, service, p1, p2 = _setup()
    service.add_appointment(p1, "10/02/2024 11:00-14:00")

    assert isinstance(service.add_appointment(p1, "10/02/2024 11am - 2pm"), Duplicate)
    assert isinstance(service.add_appointment(p1, "10/02/2024 13:59-16:00"), Overlapping)
    assert isinstance(service.add_appointment(p1, "10/02/2024 14:00-16:00"), AppointmentSaved)
    assert isinstance(service.add_appointment(p2, "10/02/2024 11:00-14:00"), AppointmentSaved)
    assert len(service.list_appointments()) == 3


def test_list_appointments_most_recent_first_with_names() -> None:
    _book, service, p1, p2 = _setup()
    service.add_appointment(p1, "09/02/2024 11am-1pm")
    service.add_appointment(p2, "10/02/2024 11am-1pm")
    listed = service.list_appointments()
    assert [a.person_name for a in listed] == ["Patient Two", "Patient One"]
    assert listed[1].time == "09 Feb 2024, 11:00 - 13:00"


def test_edit_appointment() -> None:
    _book, service, p1, p2 = _setup()
    created = service.add_appointment(p1, "10/02/2024 11:00-14:00")
    service.add_appointment(p1, "10/02/2024 15:00-16:00")

    shifted = service.edit_appointment(created.appointment_id, time_text="10/02/2024 12:00-15:00")
    assert isinstance(shifted, AppointmentSaved)
    assert shifted.appointment_id == created.appointment_id

    overlap = service.edit_appointment(created.appointment_id, time_text="10/02/2024 12:00-15:30")
    assert isinstance(overlap, Overlapping)
    duplicate = service.edit_appointment(created.appointment_id, time_text="10/02/2024 3pm-4pm")
    assert isinstance(duplicate, Duplicate)

    moved = service.edit_appointment(created.appointment_id, person_id=p2)
    assert isinstance(moved, AppointmentSaved)
    assert moved.person_id == p2

    assert isinstance(service.edit_appointment(created.appointment_id, person_id="ghost"), PersonNotFound)
    assert isinstance(service.edit_appointment(created.appointment_id, time_text="nope"), Invalid)
    assert isinstance(service.edit_appointment("missing", time_text="10/02/2024 1pm-2pm"), AppointmentNotFound)


def test_delete_appointment() -> None:
    book, service, p1, _p2 = _setup()
    created = service.add_appointment(p1, "10/02/2024 11am-1pm")
    result = service.delete_appointment(created.appointment_id)
    assert isinstance(result, AppointmentDeleted)
    assert book.appointments == ()
    assert isinstance(service.delete_appointment(created.appointment_id), AppointmentNotFound)


def test_trace_scenario_includes_pivot_only() -> None:
    _book, service, p1, p2 = _setup()
    a1 = service.add_appointment(p1, "10/02/2024 11:00-13:00")
    service.add_appointment(p2, "10/02/2024 12:00-14:00")
    service.add_appointment(p1, "10/02/2024 15:00-16:00")

    listed = service.list_appointments()
    index = [a.appointment_id for a in listed].index(a1.appointment_id)
    result = service.trace(index)

    assert isinstance(result, TraceResult)
    assert result.pivot.appointment_id == a1.appointment_id
    # The pivot is reported as overlapping itself.
    assert [a.appointment_id for a in result.appointments] == [a1.appointment_id]
    assert [c.person_id for c in result.contacts] == [p1]

    by_id = service.trace_appointment(a1.appointment_id)
    assert by_id == result


def test_trace_out_of_range() -> None:
    _book, service, p1, _p2 = _setup()
    service.add_appointment(p1, "10/02/2024 11am-1pm")
    assert isinstance(service.trace(1), AppointmentNotFound)
    assert isinstance(service.trace(-1), AppointmentNotFound)
    assert isinstance(service.trace_appointment("missing"), AppointmentNotFound)


class FailingStorage:
    def load(self):
        return None

    def save(self, book) -> None:
        raise StorageError("read-only file system")


def test_failed_save_keeps_booking(caplog) -> None:
    book, _service, p1, _p2 = _setup()
    service = AppointmentService(book, storage=FailingStorage())
    with caplog.at_level(logging.WARNING, logger="tracebook.application.appointment_service"):
        saved = service.add_appointment(p1, "10/02/2024 11am-1pm")
        deleted = service.delete_appointment(saved.appointment_id)
    assert isinstance(saved, AppointmentSaved)
    assert isinstance(deleted, AppointmentDeleted)
    assert book.appointments == ()
    assert caplog.text.count("not saved") == 2
