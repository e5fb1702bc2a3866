"""Contact tracing queries over an address book's current contents."""

from collections.abc import Callable, Iterable, Sequence

from tracebook.application.ports import AddressBookRepository
from tracebook.domain import Appointment, AppointmentNotFoundError, Person


def overlaps_pivot(pivot: Appointment) -> Callable[[Appointment], bool]:
    """Predicate: appointment overlaps pivot (same person, intersecting time)."""

    def predicate(appointment: Appointment) -> bool:
        return appointment.overlaps(pivot)

    return predicate


def persons_from_appointments(
    book: AddressBookRepository, appointments: Iterable[Appointment]
) -> list[Person]:
    """Owners of the given appointments, de-duplicated, in first-seen order."""
    seen: set[str] = set()
    out: list[Person] = []
    for appointment in appointments:
        if appointment.person_id in seen:
            continue
        person = book.get_person_by_id(appointment.person_id)
        if person is None:
            continue
        seen.add(appointment.person_id)
        out.append(person)
    return out


def trace_pivot(
    book: AddressBookRepository, pivot: Appointment
) -> tuple[list[Appointment], list[Person]]:
    """Return (overlapping appointments, exposed persons) for pivot.

    The pivot overlaps itself, so a stored pivot is part of its own result.
    """
    predicate = overlaps_pivot(pivot)
    appointments = [a for a in book.appointments if predicate(a)]
    return appointments, persons_from_appointments(book, appointments)


def pivot_at(appointments: Sequence[Appointment], index: int) -> Appointment:
    """Return the appointment at a zero-based position in a displayed list."""
    if index < 0 or index >= len(appointments):
        raise AppointmentNotFoundError(f"index {index}")
    return appointments[index]
