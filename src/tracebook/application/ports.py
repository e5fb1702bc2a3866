"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from tracebook.application.dto import AddressBookSnapshot
from tracebook.domain import Appointment, Person


class ReadOnlyAddressBook(Protocol):
    """Anything that can be read back as persons and appointments, in order."""

    @property
    def persons(self) -> tuple[Person, ...]: ...

    @property
    def appointments(self) -> tuple[Appointment, ...]: ...


class AddressBookRepository(ReadOnlyAddressBook, Protocol):
    """Holds persons and appointments and keeps them consistent."""

    def has_person(self, person: Person) -> bool:
        """Return True if a business-equal person is stored."""
        ...

    def add_person(self, person: Person) -> None:
        """Store a person. Raises DuplicatePersonError."""
        ...

    def set_person(self, target: Person, edited: Person) -> None:
        """Replace target with edited. Raises PersonNotFoundError, DuplicatePersonError."""
        ...

    def remove_person(self, person: Person) -> list[Appointment]:
        """Remove the person and every appointment that references it. Returns those appointments."""
        ...

    def get_person_by_id(self, person_id: str) -> Person | None:
        """Return the person with the given id, or None."""
        ...

    def has_appointment(self, appointment: Appointment) -> bool:
        """Return True if an appointment equal in (person, time) is stored."""
        ...

    def has_overlap_appointments(
        self, appointment: Appointment, *, ignore: Appointment | None = None
    ) -> bool:
        """Return True if the same person has an intersecting appointment."""
        ...

    def add_appointment(self, appointment: Appointment) -> None: ...

    def set_appointment(self, target: Appointment, edited: Appointment) -> None: ...

    def remove_appointment(self, appointment: Appointment) -> None: ...

    def get_appointment_by_id(self, appointment_id: str) -> Appointment | None:
        """Return the appointment with the given id, or None."""
        ...

    def reset_data(self, snapshot: ReadOnlyAddressBook) -> None:
        """Replace all persons and appointments at once, or change nothing."""
        ...

    def snapshot(self) -> AddressBookSnapshot: ...


class AddressBookStorage(Protocol):
    """Reads and writes whole address book snapshots."""

    def load(self) -> AddressBookSnapshot | None:
        """Return the stored snapshot, or None if nothing has been saved yet."""
        ...

    def save(self, book: ReadOnlyAddressBook) -> None:
        """Persist the current persons and appointments."""
        ...
