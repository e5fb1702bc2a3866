"""JSON file storage for address book snapshots.

Document shape: {"persons": [...], "appointments": [...]}. Appointment times are
stored in AppointmentTime's machine form and parsed back on load.
"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from tracebook.application.dto import AddressBookSnapshot
from tracebook.application.ports import ReadOnlyAddressBook
from tracebook.domain import (
    AddressBookError,
    Appointment,
    AppointmentTime,
    Person,
    StorageError,
)

logger = logging.getLogger(__name__)


class JsonPerson(BaseModel):
    id: str
    name: str
    phone_number: str
    email: str | None = None
    address: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime

    @classmethod
    def from_domain(cls, person: Person) -> "JsonPerson":
        return cls(
            id=person.id,
            name=person.name,
            phone_number=person.phone_number,
            email=person.email,
            address=person.address,
            tags=list(person.tags),
            created_at=person.created_at,
        )

    def to_domain(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            phone_number=self.phone_number,
            email=self.email,
            address=self.address,
            tags=tuple(self.tags),
            created_at=self.created_at,
        )


class JsonAppointment(BaseModel):
    id: str
    person_id: str
    appointment_time: str

    @classmethod
    def from_domain(cls, appointment: Appointment) -> "JsonAppointment":
        return cls(
            id=appointment.id,
            person_id=appointment.person_id,
            appointment_time=appointment.appointment_time.format_for_persistence(),
        )

    def to_domain(self) -> Appointment:
        return Appointment(
            id=self.id,
            person_id=self.person_id,
            appointment_time=AppointmentTime.parse(self.appointment_time),
        )


class JsonAddressBook(BaseModel):
    persons: list[JsonPerson] = Field(default_factory=list)
    appointments: list[JsonAppointment] = Field(default_factory=list)


class JsonAddressBookStorage:
    """Reads and writes the whole address book as one JSON file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AddressBookSnapshot | None:
        """Return the stored snapshot, or None if the file does not exist.

        Raises StorageError if the file is unreadable or holds invalid records.
        """
        if not self._path.exists():
            logger.info("No address book at %s", self._path)
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
            document = JsonAddressBook.model_validate_json(raw)
            snapshot = AddressBookSnapshot(
                persons=tuple(p.to_domain() for p in document.persons),
                appointments=tuple(a.to_domain() for a in document.appointments),
            )
        except (OSError, PydanticValidationError, AddressBookError) as exc:
            raise StorageError(f"Cannot load address book from {self._path}: {exc}") from exc
        logger.info(
            "Loaded %d persons and %d appointments from %s",
            len(snapshot.persons),
            len(snapshot.appointments),
            self._path,
        )
        return snapshot

    def save(self, book: ReadOnlyAddressBook) -> None:
        document = JsonAddressBook(
            persons=[JsonPerson.from_domain(p) for p in book.persons],
            appointments=[JsonAppointment.from_domain(a) for a in book.appointments],
        )
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot save address book to {self._path}: {exc}") from exc
        logger.debug("Saved address book to %s", self._path)
