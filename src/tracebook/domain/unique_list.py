"""Ordered collections that reject business-equal duplicates."""

from collections.abc import Callable, Iterable, Iterator
from operator import attrgetter
from typing import Any, Generic, TypeVar

from tracebook.domain.entities import Appointment, Person
from tracebook.domain.errors import (
    AppointmentNotFoundError,
    DuplicateAppointmentError,
    DuplicatePersonError,
    PersonNotFoundError,
)

T = TypeVar("T")


class UniqueList(Generic[T]):
    """List of T where no two elements satisfy is_duplicate.

    Elements are located with ==. When sort_key is given, the list is re-sorted
    after every add or set_item; otherwise insertion order is kept. set_all
    takes the given order as is.
    """

    def __init__(
        self,
        is_duplicate: Callable[[T, T], bool],
        *,
        sort_key: Callable[[T], Any] | None = None,
        reverse: bool = False,
        duplicate_error: Callable[[T], Exception] = ValueError,
        not_found_error: Callable[[T], Exception] = LookupError,
    ) -> None:
        self._items: list[T] = []
        self._is_duplicate = is_duplicate
        self._sort_key = sort_key
        self._reverse = reverse
        self._duplicate_error = duplicate_error
        self._not_found_error = not_found_error

    def contains(self, item: T) -> bool:
        return any(self._is_duplicate(existing, item) for existing in self._items)

    def add(self, item: T) -> None:
        if self.contains(item):
            raise self._duplicate_error(item)
        self._items.append(item)
        self._resort()

    def set_item(self, target: T, replacement: T) -> None:
        """Replace target with replacement; target does not conflict with itself."""
        index = self._index_of(target)
        for i, existing in enumerate(self._items):
            if i != index and self._is_duplicate(existing, replacement):
                raise self._duplicate_error(replacement)
        self._items[index] = replacement
        self._resort()

    def remove(self, item: T) -> None:
        del self._items[self._index_of(item)]

    def set_all(self, items: Iterable[T]) -> None:
        """Replace the whole contents in the given order.

        Nothing changes if items has duplicates.
        """
        out: list[T] = []
        for item in items:
            if any(self._is_duplicate(existing, item) for existing in out):
                raise self._duplicate_error(item)
            out.append(item)
        self._items = out

    def as_tuple(self) -> tuple[T, ...]:
        """Read-only view of the current contents."""
        return tuple(self._items)

    def _index_of(self, item: T) -> int:
        for i, existing in enumerate(self._items):
            if existing == item:
                return i
        raise self._not_found_error(item)

    def _resort(self) -> None:
        if self._sort_key is not None:
            self._items.sort(key=self._sort_key, reverse=self._reverse)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniqueList):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


class UniquePersonList(UniqueList[Person]):
    """Persons in insertion order, unique by is_same_person."""

    def __init__(self) -> None:
        super().__init__(
            lambda existing, item: existing.is_same_person(item),
            duplicate_error=DuplicatePersonError,
            not_found_error=lambda person: PersonNotFoundError(person.id),
        )


class UniqueAppointmentList(UniqueList[Appointment]):
    """Appointments most recent first, unique by (person_id, appointment_time)."""

    def __init__(self) -> None:
        super().__init__(
            lambda existing, item: existing == item,
            sort_key=attrgetter("appointment_time"),
            reverse=True,
            duplicate_error=DuplicateAppointmentError,
            not_found_error=lambda appointment: AppointmentNotFoundError(appointment.id),
        )

    def overlap(self, item: Appointment, *, ignore: Appointment | None = None) -> bool:
        """True if any stored appointment other than ignore overlaps item."""
        return any(
            existing.overlaps(item)
            for existing in self._items
            if ignore is None or existing != ignore
        )
