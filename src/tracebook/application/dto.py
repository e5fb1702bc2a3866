"""Input DTOs, result types and snapshots for the contact and appointment flows."""

from dataclasses import dataclass, field
from datetime import datetime

from tracebook.domain import Appointment, Person


@dataclass(frozen=True)
class AddressBookSnapshot:
    """Full contents of an address book, in display order."""

    persons: tuple[Person, ...] = ()
    appointments: tuple[Appointment, ...] = ()


@dataclass(frozen=True)
class ContactData:
    """Fields for a new contact. Phone may omit the country code if a default region is set."""

    name: str
    phone_number: str
    email: str | None = None
    address: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContactEdit:
    """Fields to change on an existing contact. None means keep the current value."""

    name: str | None = None
    phone_number: str | None = None
    email: str | None = None
    address: str | None = None
    tags: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ContactSummary:
    """One contact as returned by list_contacts, get_contact and find_contacts."""

    person_id: str
    name: str
    phone_number: str
    email: str | None
    address: str | None
    tags: tuple[str, ...]
    created_at: datetime


@dataclass(frozen=True)
class AppointmentSummary:
    """One appointment with its owner's name resolved."""

    appointment_id: str
    person_id: str
    person_name: str
    time: str


# --- contact results ---


@dataclass(frozen=True)
class ContactSaved:
    person_id: str
    name: str


@dataclass(frozen=True)
class ContactDeleted:
    """Contact removed together with its appointments."""

    person_id: str
    name: str
    appointments_removed: int


# --- appointment results ---


@dataclass(frozen=True)
class AppointmentSaved:
    appointment_id: str
    person_id: str
    time: str


@dataclass(frozen=True)
class AppointmentDeleted:
    appointment_id: str
    time: str


@dataclass(frozen=True)
class TraceResult:
    """Appointments overlapping the pivot (pivot included) and the people who hold them."""

    pivot: AppointmentSummary
    appointments: list[AppointmentSummary] = field(default_factory=list)
    contacts: list[ContactSummary] = field(default_factory=list)


# --- failures ---


@dataclass(frozen=True)
class Invalid:
    """Input could not be parsed or violates an entity rule."""

    reason: str
    field: str | None = None


@dataclass(frozen=True)
class Duplicate:
    """An identical contact or appointment already exists."""

    reason: str


@dataclass(frozen=True)
class Overlapping:
    """The person already has an appointment intersecting the requested time."""

    reason: str


@dataclass(frozen=True)
class PersonNotFound:
    reference: str


@dataclass(frozen=True)
class AppointmentNotFound:
    reference: str
