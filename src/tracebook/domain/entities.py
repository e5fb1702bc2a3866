"""Domain entities: Person and Appointment."""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from tracebook.domain.appointment_time import AppointmentTime
from tracebook.domain.errors import ValidationError
from tracebook.domain.phone import require_phone

# Max length for free-text person fields.
NAME_MAX_LENGTH = 500
ADDRESS_MAX_LENGTH = 2000

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def new_id() -> str:
    """Return a fresh opaque identifier for a Person or Appointment."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Person:
    """
    Represents a contact in the address book.
    Two records describe the same person when name and phone number match;
    the id is what appointments use to refer to the person.
    """

    id: str = field(default_factory=new_id)
    name: str = field(default="")
    phone_number: str = field(default="")
    email: str | None = None
    address: str | None = None
    tags: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        name = (self.name or "").strip()
        if not name:
            raise ValidationError("name", "Person name must be non-empty.")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(
                "name", f"Person name must be at most {NAME_MAX_LENGTH} chars."
            )
        object.__setattr__(self, "name", name)

        object.__setattr__(self, "phone_number", require_phone(self.phone_number))

        if self.email is not None:
            email = self.email.strip()
            if email and not _EMAIL_PATTERN.match(email):
                raise ValidationError("email", f"Invalid email address: {email!r}")
            object.__setattr__(self, "email", email or None)

        if self.address is not None:
            address = self.address.strip()
            if len(address) > ADDRESS_MAX_LENGTH:
                raise ValidationError(
                    "address", f"Address must be at most {ADDRESS_MAX_LENGTH} chars."
                )
            object.__setattr__(self, "address", address or None)

        tags = set()
        for tag in self.tags:
            tag = (tag or "").strip()
            if not tag:
                raise ValidationError("tags", "Tags must be non-empty.")
            tags.add(tag)
        object.__setattr__(self, "tags", tuple(sorted(tags)))

    def is_same_person(self, other: "Person | None") -> bool:
        """Business-key equality used to reject duplicate contacts."""
        if other is None:
            return False
        if other is self:
            return True
        return self.name == other.name and self.phone_number == other.phone_number


@dataclass(frozen=True)
class Appointment:
    """
    A time slot booked for one person.
    Equality is (person_id, appointment_time); the id does not take part,
    so two bookings of the same person at the same time are duplicates.
    Natural ordering is most recent first.
    """

    person_id: str
    appointment_time: AppointmentTime
    id: str = field(default_factory=new_id, compare=False)

    def __post_init__(self):
        if not self.person_id or not str(self.person_id).strip():
            raise ValidationError("person_id", "Appointment must reference a person.")
        if not isinstance(self.appointment_time, AppointmentTime):
            raise ValidationError(
                "appointment_time", "Appointment must have an AppointmentTime."
            )

    def overlaps(self, other: "Appointment") -> bool:
        """Same person and intersecting time on the same date."""
        if self.person_id != other.person_id:
            return False
        return self.appointment_time.overlaps_same_date(other.appointment_time)

    def __lt__(self, other: "Appointment") -> bool:
        if not isinstance(other, Appointment):
            return NotImplemented
        return other.appointment_time < self.appointment_time
