"""
Tracebook core: clean-architecture layout.

- domain: entities (Person, Appointment), AppointmentTime, unique lists, errors.
- application: use cases (ContactService, AppointmentService), tracing queries, ports, DTOs.
- infrastructure: adapters (AddressBook store, JsonAddressBookStorage).
"""

from tracebook.application import (
    AddressBookSnapshot,
    AppointmentService,
    ContactData,
    ContactEdit,
    ContactService,
    TraceResult,
    trace_pivot,
)
from tracebook.domain import Appointment, AppointmentTime, Person
from tracebook.infrastructure import AddressBook, JsonAddressBookStorage

__all__ = [
    "AddressBook",
    "AddressBookSnapshot",
    "Appointment",
    "AppointmentService",
    "AppointmentTime",
    "ContactData",
    "ContactEdit",
    "ContactService",
    "JsonAddressBookStorage",
    "Person",
    "TraceResult",
    "trace_pivot",
]
