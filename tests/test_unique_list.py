"""Tests for UniqueList and its person/appointment specializations."""

import pytest

from tracebook.domain import (
    Appointment,
    AppointmentNotFoundError,
    AppointmentTime,
    DuplicateAppointmentError,
    DuplicatePersonError,
    Person,
    PersonNotFoundError,
    UniqueAppointmentList,
    UniqueList,
    UniquePersonList,
)


def _casefold_list() -> UniqueList[str]:
    return UniqueList(lambda existing, item: existing.lower() == item.lower())


def _appointment(person_id: str, text: str) -> Appointment:
    return Appointment(person_id=person_id, appointment_time=AppointmentTime.parse(text))


def test_add_rejects_business_duplicates():
    items = _casefold_list()
    items.add("apple")
    items.add("pear")
    with pytest.raises(ValueError):
        items.add("APPLE")
    assert items.as_tuple() == ("apple", "pear")
    assert items.contains("Pear")


def test_set_item_ignores_the_replaced_element():
    items = _casefold_list()
    items.add("apple")
    items.add("pear")
    items.set_item("apple", "Apple")
    assert items.as_tuple() == ("Apple", "pear")

    with pytest.raises(ValueError):
        items.set_item("Apple", "PEAR")
    assert items.as_tuple() == ("Apple", "pear")


def test_missing_target_raises_not_found():
    items = _casefold_list()
    items.add("apple")
    with pytest.raises(LookupError):
        items.set_item("plum", "cherry")
    with pytest.raises(LookupError):
        items.remove("plum")
    items.remove("apple")
    assert len(items) == 0


def test_set_all_is_all_or_nothing():
    items = _casefold_list()
    items.add("apple")
    with pytest.raises(ValueError):
        items.set_all(["kiwi", "fig", "KIWI"])
    assert items.as_tuple() == ("apple",)
    items.set_all(["kiwi", "fig"])
    assert list(items) == ["kiwi", "fig"]


def test_person_list_keeps_insertion_order_and_typed_errors():
    persons = UniquePersonList()
    bob = Person(name="Bob", phone_number="+12025551111")
    amy = Person(name="Amy", phone_number="+12025552222")
    persons.add(bob)
    persons.add(amy)
    assert persons.as_tuple() == (bob, amy)

    with pytest.raises(DuplicatePersonError):
        persons.add(Person(name="Bob", phone_number="+1 202 555 1111"))
    with pytest.raises(PersonNotFoundError):
        persons.remove(Person(name="Carl", phone_number="+12025551234"))


def test_appointment_list_is_sorted_most_recent_first():
    appointments = UniqueAppointmentList()
    first = _appointment("p1", "09/02/2024 11am-2pm")
    second = _appointment("p1", "10/02/2024 9am-10am")
    third = _appointment("p2", "10/02/2024 3pm-4pm")
    for a in (second, first, third):
        appointments.add(a)
    assert appointments.as_tuple() == (third, second, first)

    moved = _appointment("p1", "11/02/2024 9am-10am")
    appointments.set_item(first, moved)
    assert appointments.as_tuple() == (moved, third, second)


def test_set_all_keeps_given_order_until_next_add():
    appointments = UniqueAppointmentList()
    early = _appointment("p1", "10/02/2024 9am-10am")
    late = _appointment("p1", "11/02/2024 9am-10am")
    appointments.set_all([early, late])
    assert appointments.as_tuple() == (early, late)

    latest = _appointment("p2", "12/02/2024 9am-10am")
    appointments.add(latest)
    assert appointments.as_tuple() == (latest, late, early)


def test_appointment_list_duplicate_and_not_found():
    appointments = UniqueAppointmentList()
    appointments.add(_appointment("p1", "10/02/2024 11am-2pm"))
    with pytest.raises(DuplicateAppointmentError):
        appointments.add(_appointment("p1", "10/02/2024 11:00-14:00"))
    with pytest.raises(AppointmentNotFoundError):
        appointments.remove(_appointment("p1", "10/02/2024 3pm-4pm"))


def test_overlap_is_distinct_from_contains():
    appointments = UniqueAppointmentList()
    stored = _appointment("p1", "10/02/2024 11:00-14:00")
    appointments.add(stored)

    crossing = _appointment("p1", "10/02/2024 13:00-15:00")
    assert appointments.overlap(crossing)
    assert not appointments.contains(crossing)

    assert not appointments.overlap(_appointment("p1", "10/02/2024 14:00-15:00"))
    assert not appointments.overlap(_appointment("p2", "10/02/2024 13:00-15:00"))
    assert not appointments.overlap(crossing, ignore=stored)
