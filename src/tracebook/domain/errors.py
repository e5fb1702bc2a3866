"""Typed errors raised by the domain and the address book store."""


class AddressBookError(Exception):
    """Base class for every recoverable address book failure."""


class ValidationError(AddressBookError, ValueError):
    """A value could not be parsed or violates an entity invariant."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class DuplicatePersonError(AddressBookError):
    def __init__(self, person) -> None:
        super().__init__(f"Person '{person.name}' already exists in the address book.")
        self.person = person


class DuplicateAppointmentError(AddressBookError):
    def __init__(self, appointment) -> None:
        super().__init__("This appointment already exists in the address book.")
        self.appointment = appointment


class OverlappingAppointmentError(AddressBookError):
    def __init__(self, appointment) -> None:
        super().__init__("This appointment overlaps another appointment of the same person.")
        self.appointment = appointment


class PersonNotFoundError(AddressBookError, LookupError):
    def __init__(self, reference) -> None:
        super().__init__(f"Person not found: {reference}")
        self.reference = reference


class AppointmentNotFoundError(AddressBookError, LookupError):
    def __init__(self, reference) -> None:
        super().__init__(f"Appointment not found: {reference}")
        self.reference = reference


class ReferentialIntegrityError(AddressBookError):
    """An appointment would reference a person that is not in the address book."""


class StorageError(AddressBookError):
    """Stored address book data could not be read or written."""
