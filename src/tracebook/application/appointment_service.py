"""Appointment booking, editing and contact tracing."""

import dataclasses
import logging

from tracebook.application.contact_service import to_summary
from tracebook.application.dto import (
    AppointmentDeleted,
    AppointmentNotFound,
    AppointmentSaved,
    AppointmentSummary,
    Duplicate,
    Invalid,
    Overlapping,
    PersonNotFound,
    TraceResult,
)
from tracebook.application.ports import AddressBookRepository, AddressBookStorage
from tracebook.application.tracing import pivot_at, trace_pivot
from tracebook.domain import (
    Appointment,
    AppointmentNotFoundError,
    AppointmentTime,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MESSAGE_DUPLICATE_APPOINTMENT = "This appointment already exists in the address book."
MESSAGE_OVERLAPPING_APPOINTMENT = (
    "This person already has an appointment overlapping that time."
)


class AppointmentService:
    """Appointment use cases over an address book. Saves through storage after each change.

    Checks run in a fixed order: time parses, person exists, not an exact
    duplicate, no overlap with the person's other appointments.
    """

    def __init__(
        self,
        book: AddressBookRepository,
        *,
        storage: AddressBookStorage | None = None,
    ) -> None:
        self._book = book
        self._storage = storage

    def add_appointment(
        self, person_id: str, time_text: str
    ) -> AppointmentSaved | Invalid | PersonNotFound | Duplicate | Overlapping:
        try:
            appointment_time = AppointmentTime.parse(time_text)
        except ValidationError as exc:
            return Invalid(reason=str(exc), field=exc.field)
        if self._book.get_person_by_id(person_id) is None:
            return PersonNotFound(reference=person_id)

        appointment = Appointment(person_id=person_id, appointment_time=appointment_time)
        if self._book.has_appointment(appointment):
            return Duplicate(reason=MESSAGE_DUPLICATE_APPOINTMENT)
        if self._book.has_overlap_appointments(appointment):
            return Overlapping(reason=MESSAGE_OVERLAPPING_APPOINTMENT)

        self._book.add_appointment(appointment)
        self._save()
        return AppointmentSaved(
            appointment_id=appointment.id,
            person_id=person_id,
            time=appointment_time.format(),
        )

    def edit_appointment(
        self,
        appointment_id: str,
        *,
        time_text: str | None = None,
        person_id: str | None = None,
    ) -> (
        AppointmentSaved
        | Invalid
        | PersonNotFound
        | AppointmentNotFound
        | Duplicate
        | Overlapping
    ):
        """Move an appointment to another time and/or person. The id is kept."""
        target = self._book.get_appointment_by_id(appointment_id)
        if target is None:
            return AppointmentNotFound(reference=appointment_id)

        changes = {}
        if time_text is not None:
            try:
                changes["appointment_time"] = AppointmentTime.parse(time_text)
            except ValidationError as exc:
                return Invalid(reason=str(exc), field=exc.field)
        if person_id is not None:
            if self._book.get_person_by_id(person_id) is None:
                return PersonNotFound(reference=person_id)
            changes["person_id"] = person_id

        edited = dataclasses.replace(target, **changes)
        others = [a for a in self._book.appointments if a != target]
        if any(a == edited for a in others):
            return Duplicate(reason=MESSAGE_DUPLICATE_APPOINTMENT)
        if self._book.has_overlap_appointments(edited, ignore=target):
            return Overlapping(reason=MESSAGE_OVERLAPPING_APPOINTMENT)

        self._book.set_appointment(target, edited)
        self._save()
        return AppointmentSaved(
            appointment_id=edited.id,
            person_id=edited.person_id,
            time=edited.appointment_time.format(),
        )

    def delete_appointment(
        self, appointment_id: str
    ) -> AppointmentDeleted | AppointmentNotFound:
        appointment = self._book.get_appointment_by_id(appointment_id)
        if appointment is None:
            return AppointmentNotFound(reference=appointment_id)
        self._book.remove_appointment(appointment)
        self._save()
        return AppointmentDeleted(
            appointment_id=appointment.id, time=appointment.appointment_time.format()
        )

    def list_appointments(self) -> list[AppointmentSummary]:
        """Return all appointments, most recent first."""
        return [self._summary(a) for a in self._book.appointments]

    def trace(self, index: int) -> TraceResult | AppointmentNotFound:
        """Trace the appointment at a zero-based position in list_appointments()."""
        try:
            pivot = pivot_at(self._book.appointments, index)
        except AppointmentNotFoundError as exc:
            return AppointmentNotFound(reference=str(exc.reference))
        return self._trace(pivot)

    def trace_appointment(self, appointment_id: str) -> TraceResult | AppointmentNotFound:
        pivot = self._book.get_appointment_by_id(appointment_id)
        if pivot is None:
            return AppointmentNotFound(reference=appointment_id)
        return self._trace(pivot)

    def _trace(self, pivot: Appointment) -> TraceResult:
        appointments, persons = trace_pivot(self._book, pivot)
        logger.info(
            "Traced appointment %s: %d appointment(s), %d person(s)",
            pivot.id,
            len(appointments),
            len(persons),
        )
        return TraceResult(
            pivot=self._summary(pivot),
            appointments=[self._summary(a) for a in appointments],
            contacts=[to_summary(p) for p in persons],
        )

    def _summary(self, appointment: Appointment) -> AppointmentSummary:
        person = self._book.get_person_by_id(appointment.person_id)
        return AppointmentSummary(
            appointment_id=appointment.id,
            person_id=appointment.person_id,
            person_name=person.name if person else "Unknown",
            time=appointment.appointment_time.format(),
        )

    def _save(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save(self._book)
        except StorageError:
            logger.warning("Address book change was not saved", exc_info=True)
