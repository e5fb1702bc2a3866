"""Contact add, edit, delete, list and find."""

import dataclasses
import logging

from tracebook.application.dto import (
    AddressBookSnapshot,
    ContactData,
    ContactDeleted,
    ContactEdit,
    ContactSaved,
    ContactSummary,
    Duplicate,
    Invalid,
    PersonNotFound,
)
from tracebook.application.ports import AddressBookRepository, AddressBookStorage
from tracebook.domain import (
    DuplicatePersonError,
    Person,
    StorageError,
    ValidationError,
)
from tracebook.domain.phone import normalize_phone

logger = logging.getLogger(__name__)

MESSAGE_DUPLICATE_PERSON = "This person already exists in the address book."


def to_summary(person: Person) -> ContactSummary:
    return ContactSummary(
        person_id=person.id,
        name=person.name,
        phone_number=person.phone_number,
        email=person.email,
        address=person.address,
        tags=person.tags,
        created_at=person.created_at,
    )


class ContactService:
    """Contact use cases over an address book. Saves through storage after each change."""

    def __init__(
        self,
        book: AddressBookRepository,
        *,
        storage: AddressBookStorage | None = None,
        default_region: str | None = None,
    ) -> None:
        self._book = book
        self._storage = storage
        self._default_region = default_region

    def add_contact(self, data: ContactData) -> ContactSaved | Duplicate | Invalid:
        """Create a contact. Returns saved, duplicate (same name and phone), or invalid."""
        try:
            person = Person(
                name=data.name,
                phone_number=self._normalize_phone(data.phone_number),
                email=data.email,
                address=data.address,
                tags=tuple(data.tags),
            )
            self._book.add_person(person)
        except ValidationError as exc:
            return Invalid(reason=str(exc), field=exc.field)
        except DuplicatePersonError:
            return Duplicate(reason=MESSAGE_DUPLICATE_PERSON)
        self._save()
        return ContactSaved(person_id=person.id, name=person.name)

    def edit_contact(
        self, person_id: str, edit: ContactEdit
    ) -> ContactSaved | Duplicate | Invalid | PersonNotFound:
        """Change some fields of a contact. The id is kept, so appointments still point at it."""
        target = self._book.get_person_by_id(person_id)
        if target is None:
            return PersonNotFound(reference=person_id)
        changes = {
            key: value
            for key, value in dataclasses.asdict(edit).items()
            if value is not None
        }
        if "phone_number" in changes:
            changes["phone_number"] = self._normalize_phone(changes["phone_number"])
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"])
        try:
            edited = dataclasses.replace(target, **changes)
            self._book.set_person(target, edited)
        except ValidationError as exc:
            return Invalid(reason=str(exc), field=exc.field)
        except DuplicatePersonError:
            return Duplicate(reason=MESSAGE_DUPLICATE_PERSON)
        self._save()
        return ContactSaved(person_id=edited.id, name=edited.name)

    def delete_contact(self, person_id: str) -> ContactDeleted | PersonNotFound:
        """Delete a contact and all of its appointments."""
        person = self._book.get_person_by_id(person_id)
        if person is None:
            return PersonNotFound(reference=person_id)
        removed = self._book.remove_person(person)
        self._save()
        return ContactDeleted(
            person_id=person.id, name=person.name, appointments_removed=len(removed)
        )

    def list_contacts(self) -> list[ContactSummary]:
        """Return all contacts in insertion order."""
        return [to_summary(person) for person in self._book.persons]

    def get_contact(self, person_id: str) -> ContactSummary | None:
        """Return a contact by id, or None if not found."""
        person = self._book.get_person_by_id(person_id)
        if person is None:
            return None
        return to_summary(person)

    def find_contacts(self, keyword: str) -> list[ContactSummary]:
        """Return contacts whose name contains the keyword (case-insensitive, partial)."""
        if not keyword or not keyword.strip():
            return []
        needle = keyword.strip().lower()
        return [
            to_summary(person)
            for person in self._book.persons
            if needle in person.name.lower()
        ]

    def clear(self) -> None:
        """Remove every contact and appointment."""
        self._book.reset_data(AddressBookSnapshot())
        self._save()

    def _normalize_phone(self, raw: str) -> str:
        # Unparseable input is passed through so Person reports the field.
        return normalize_phone(raw, default_region=self._default_region) or raw

    def _save(self) -> None:
        # The change stays applied in memory; the next successful save persists it.
        if self._storage is None:
            return
        try:
            self._storage.save(self._book)
        except StorageError:
            logger.warning("Address book change was not saved", exc_info=True)
