"""In-memory address book: persons and appointments, each held as a unique list plus an id index.

Every mutation goes through AddressBook so the list and the id map for an
entity type always hold exactly the same records. Not thread-safe; callers that
share a book across threads must lock around each call.
"""

import logging

from tracebook.application.dto import AddressBookSnapshot
from tracebook.application.ports import ReadOnlyAddressBook
from tracebook.domain import (
    Appointment,
    AppointmentNotFoundError,
    DuplicateAppointmentError,
    DuplicatePersonError,
    OverlappingAppointmentError,
    Person,
    PersonNotFoundError,
    ReferentialIntegrityError,
    UniqueAppointmentList,
    UniquePersonList,
)

logger = logging.getLogger(__name__)


class AddressBook:
    """Stores persons (insertion order) and appointments (most recent first).
    Every stored appointment references a stored person.
    """

    def __init__(self, snapshot: ReadOnlyAddressBook | None = None) -> None:
        self._persons = UniquePersonList()
        self._appointments = UniqueAppointmentList()
        self._person_by_id: dict[str, Person] = {}
        self._appointment_by_id: dict[str, Appointment] = {}
        if snapshot is not None:
            self.reset_data(snapshot)

    # --- whole-book operations ---

    def reset_data(self, snapshot: ReadOnlyAddressBook) -> None:
        """Replace persons and appointments with the snapshot's contents, in its order.

        The snapshot is validated in full before anything is swapped in, so a
        failure leaves the book exactly as it was.
        """
        persons = UniquePersonList()
        persons.set_all(snapshot.persons)
        person_by_id = _index_by_id(persons, DuplicatePersonError)

        appointments = UniqueAppointmentList()
        appointments.set_all(snapshot.appointments)
        appointment_by_id = _index_by_id(appointments, DuplicateAppointmentError)
        for appointment in appointments:
            if appointment.person_id not in person_by_id:
                raise ReferentialIntegrityError(
                    f"Appointment {appointment.id} references unknown person {appointment.person_id}"
                )

        self._persons = persons
        self._appointments = appointments
        self._person_by_id = person_by_id
        self._appointment_by_id = appointment_by_id
        logger.debug(
            "Address book reset: %d persons, %d appointments",
            len(persons),
            len(appointments),
        )

    def snapshot(self) -> AddressBookSnapshot:
        return AddressBookSnapshot(persons=self.persons, appointments=self.appointments)

    @property
    def persons(self) -> tuple[Person, ...]:
        return self._persons.as_tuple()

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return self._appointments.as_tuple()

    # --- persons ---

    def has_person(self, person: Person) -> bool:
        return self._persons.contains(person)

    def add_person(self, person: Person) -> None:
        if person.id in self._person_by_id:
            raise DuplicatePersonError(person)
        self._persons.add(person)
        self._person_by_id[person.id] = person
        logger.debug("Added person %s", person.id)

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace target with edited. Edits normally keep target's id.

        Changing the id is refused while target still owns appointments.
        """
        self._require_person(target)
        if edited.id != target.id:
            if edited.id in self._person_by_id:
                raise DuplicatePersonError(edited)
            if any(a.person_id == target.id for a in self._appointments):
                raise ReferentialIntegrityError(
                    f"Person {target.id} has appointments; its id cannot change"
                )
        self._persons.set_item(target, edited)
        del self._person_by_id[target.id]
        self._person_by_id[edited.id] = edited
        logger.debug("Updated person %s", edited.id)

    def remove_person(self, person: Person) -> list[Appointment]:
        """Remove person and, first, every appointment that references it.

        Returns the removed appointments.
        """
        self._require_person(person)
        dependents = [a for a in self._appointments if a.person_id == person.id]
        for appointment in dependents:
            self.remove_appointment(appointment)
        self._persons.remove(person)
        del self._person_by_id[person.id]
        logger.info(
            "Removed person %s and %d appointment(s)", person.id, len(dependents)
        )
        return dependents

    def get_person_by_id(self, person_id: str) -> Person | None:
        return self._person_by_id.get(person_id)

    # --- appointments ---

    def has_appointment(self, appointment: Appointment) -> bool:
        return self._appointments.contains(appointment)

    def has_overlap_appointments(
        self, appointment: Appointment, *, ignore: Appointment | None = None
    ) -> bool:
        return self._appointments.overlap(appointment, ignore=ignore)

    def add_appointment(self, appointment: Appointment) -> None:
        self._require_owner(appointment)
        if appointment.id in self._appointment_by_id:
            raise DuplicateAppointmentError(appointment)
        if self._appointments.contains(appointment):
            raise DuplicateAppointmentError(appointment)
        if self._appointments.overlap(appointment):
            raise OverlappingAppointmentError(appointment)
        self._appointments.add(appointment)
        self._appointment_by_id[appointment.id] = appointment
        logger.debug("Added appointment %s for person %s", appointment.id, appointment.person_id)

    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        self._require_appointment(target)
        self._require_owner(edited)
        if edited.id != target.id and edited.id in self._appointment_by_id:
            raise DuplicateAppointmentError(edited)
        if any(a == edited for a in self._appointments if a != target):
            raise DuplicateAppointmentError(edited)
        if self._appointments.overlap(edited, ignore=target):
            raise OverlappingAppointmentError(edited)
        self._appointments.set_item(target, edited)
        del self._appointment_by_id[target.id]
        self._appointment_by_id[edited.id] = edited
        logger.debug("Updated appointment %s", edited.id)

    def remove_appointment(self, appointment: Appointment) -> None:
        self._require_appointment(appointment)
        self._appointments.remove(appointment)
        del self._appointment_by_id[appointment.id]
        logger.debug("Removed appointment %s", appointment.id)

    def get_appointment_by_id(self, appointment_id: str) -> Appointment | None:
        return self._appointment_by_id.get(appointment_id)

    # --- helpers ---

    def _require_person(self, person: Person) -> None:
        if self._person_by_id.get(person.id) != person:
            raise PersonNotFoundError(person.id)

    def _require_appointment(self, appointment: Appointment) -> None:
        stored = self._appointment_by_id.get(appointment.id)
        if stored is None or stored != appointment:
            raise AppointmentNotFoundError(appointment.id)

    def _require_owner(self, appointment: Appointment) -> None:
        if appointment.person_id not in self._person_by_id:
            raise ReferentialIntegrityError(
                f"Appointment references unknown person {appointment.person_id}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self.persons == other.persons and self.appointments == other.appointments

    def __repr__(self) -> str:
        return f"AddressBook(persons={len(self._persons)}, appointments={len(self._appointments)})"


def _index_by_id(items, duplicate_error) -> dict:
    out = {}
    for item in items:
        if item.id in out:
            raise duplicate_error(item)
        out[item.id] = item
    return out
