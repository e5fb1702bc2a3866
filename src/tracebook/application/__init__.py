"""Application layer: use cases, ports, queries and DTOs. Depends only on domain."""

from tracebook.application.appointment_service import AppointmentService
from tracebook.application.contact_service import ContactService
from tracebook.application.dto import (
    AddressBookSnapshot,
    AppointmentDeleted,
    AppointmentNotFound,
    AppointmentSaved,
    AppointmentSummary,
    ContactData,
    ContactDeleted,
    ContactEdit,
    ContactSaved,
    ContactSummary,
    Duplicate,
    Invalid,
    Overlapping,
    PersonNotFound,
    TraceResult,
)
from tracebook.application.ports import (
    AddressBookRepository,
    AddressBookStorage,
    ReadOnlyAddressBook,
)
from tracebook.application.tracing import trace_pivot

__all__ = [
    "AddressBookRepository",
    "AddressBookSnapshot",
    "AddressBookStorage",
    "AppointmentDeleted",
    "AppointmentNotFound",
    "AppointmentSaved",
    "AppointmentService",
    "AppointmentSummary",
    "ContactData",
    "ContactDeleted",
    "ContactEdit",
    "ContactSaved",
    "ContactService",
    "ContactSummary",
    "Duplicate",
    "Invalid",
    "Overlapping",
    "PersonNotFound",
    "ReadOnlyAddressBook",
    "TraceResult",
    "trace_pivot",
]
