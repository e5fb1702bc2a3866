"""Domain layer: entities, value objects and collections. No dependencies on outer layers."""

from tracebook.domain.appointment_time import AppointmentTime
from tracebook.domain.entities import Appointment, Person, new_id
from tracebook.domain.errors import (
    AddressBookError,
    AppointmentNotFoundError,
    DuplicateAppointmentError,
    DuplicatePersonError,
    OverlappingAppointmentError,
    PersonNotFoundError,
    ReferentialIntegrityError,
    StorageError,
    ValidationError,
)
from tracebook.domain.unique_list import (
    UniqueAppointmentList,
    UniqueList,
    UniquePersonList,
)

__all__ = [
    "AddressBookError",
    "Appointment",
    "AppointmentNotFoundError",
    "AppointmentTime",
    "DuplicateAppointmentError",
    "DuplicatePersonError",
    "OverlappingAppointmentError",
    "Person",
    "PersonNotFoundError",
    "ReferentialIntegrityError",
    "StorageError",
    "UniqueAppointmentList",
    "UniqueList",
    "UniquePersonList",
    "ValidationError",
    "new_id",
]
