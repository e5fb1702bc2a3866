"""Tests for JsonAddressBookStorage (file round trip and error handling)."""

import json

import pytest

from tracebook.domain import Appointment, AppointmentTime, Person, StorageError
from tracebook.infrastructure import AddressBook, JsonAddressBookStorage


def _book() -> AddressBook:
    book = AddressBook()
    alice = Person(name="Alice", phone_number="+12025551111", email="alice@example.com", tags=("friends",))
    bob = Person(name="Bob", phone_number="+12025552222", address="1 Main St")
    book.add_person(alice)
    book.add_person(bob)
    book.add_appointment(
        Appointment(person_id=alice.id, appointment_time=AppointmentTime.parse("10/02/2024 11am-2pm"))
    )
    book.add_appointment(
        Appointment(person_id=bob.id, appointment_time=AppointmentTime.parse("09/02/2024 9:30-10:15"))
    )
    return book


def test_load_missing_file_returns_none(tmp_path):
    assert JsonAddressBookStorage(tmp_path / "missing.json").load() is None


def test_save_then_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "addressbook.json"
    storage = JsonAddressBookStorage(path)
    book = _book()

    storage.save(book)
    assert path.exists()
    snapshot = storage.load()

    assert snapshot.persons == book.persons
    assert snapshot.appointments == book.appointments
    assert [a.id for a in snapshot.appointments] == [a.id for a in book.appointments]
    assert AddressBook(snapshot) == book


def test_appointment_time_is_stored_in_machine_form(tmp_path):
    path = tmp_path / "addressbook.json"
    JsonAddressBookStorage(path).save(_book())
    document = json.loads(path.read_text(encoding="utf-8"))
    assert [a["appointment_time"] for a in document["appointments"]] == [
        "10/02/2024 11:00-14:00",
        "09/02/2024 09:30-10:15",
    ]


def test_malformed_json_raises_storage_error(tmp_path):
    path = tmp_path / "addressbook.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonAddressBookStorage(path).load()


def test_invalid_record_raises_storage_error(tmp_path):
    path = tmp_path / "addressbook.json"
    path.write_text(
        json.dumps(
            {
                "persons": [],
                "appointments": [
                    {"id": "a1", "person_id": "p1", "appointment_time": "10/02/2024 2pm-1pm"}
                ],
            }
        ),
        encoding="utf-8",
    )
    with pytest.raises(StorageError):
        JsonAddressBookStorage(path).load()
