"""AppointmentTime: a closed time interval on a single calendar date."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time

from tracebook.domain.errors import ValidationError

DATE_FORMAT = "%d/%m/%Y"
STORAGE_TIME_FORMAT = "%H:%M"
DISPLAY_DATE_FORMAT = "%d %b %Y"

# Accepted spellings of a time of day, tried in order.
_TIME_FORMATS = ("%H:%M", "%I%p", "%I:%M%p")

_PATTERN = re.compile(
    r"^\s*(?P<date>\d{1,2}/\d{1,2}/\d{4})\s+"
    r"(?P<start>\d{1,2}(?::\d{2})?\s*(?:[ap]m)?)\s*[-–—]\s*"
    r"(?P<end>\d{1,2}(?::\d{2})?\s*(?:[ap]m)?)\s*$",
    re.IGNORECASE,
)

MESSAGE_CONSTRAINTS = (
    "Appointment time must look like 'dd/mm/yyyy START-END' where START and END are "
    "'HH:MM' or 'h[:MM]am/pm', and START must be before END."
)


def _parse_time(text: str) -> time:
    compact = re.sub(r"\s+", "", text)
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(compact, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised time of day: {text!r}")


@dataclass(frozen=True, order=True)
class AppointmentTime:
    """
    Date plus start and end time of day. start is strictly before end.
    Equality and ordering are by (date, start, end).
    """

    date: date
    start: time
    end: time

    def __post_init__(self):
        if not self.start < self.end:
            raise _invalid("start time must be before end time")

    @classmethod
    def parse(cls, text: str) -> "AppointmentTime":
        """Parse e.g. '10/02/2024 11am-2pm' or '10/02/2024 11:00 - 13:00'."""
        match = _PATTERN.match(text or "")
        if match is None:
            raise _invalid(f"cannot parse {text!r}")
        try:
            day = datetime.strptime(match["date"], DATE_FORMAT).date()
            start = _parse_time(match["start"])
            end = _parse_time(match["end"])
        except ValueError as exc:
            raise _invalid(str(exc)) from exc
        return cls(date=day, start=start, end=end)

    def overlaps_same_date(self, other: "AppointmentTime") -> bool:
        """True if both are on the same date and share a non-zero stretch of time.

        Touching endpoints do not overlap: 11:00-14:00 and 14:00-16:00 are disjoint.
        """
        if self.date != other.date:
            return False
        return other.start < self.end and self.start < other.end

    def format(self) -> str:
        return (
            f"{self.date.strftime(DISPLAY_DATE_FORMAT)}, "
            f"{self.start.strftime(STORAGE_TIME_FORMAT)} - {self.end.strftime(STORAGE_TIME_FORMAT)}"
        )

    def format_for_persistence(self) -> str:
        return (
            f"{self.date.strftime(DATE_FORMAT)} "
            f"{self.start.strftime(STORAGE_TIME_FORMAT)}-{self.end.strftime(STORAGE_TIME_FORMAT)}"
        )

    def __str__(self) -> str:
        return self.format()


def _invalid(detail: str) -> ValidationError:
    return ValidationError("appointment_time", f"{MESSAGE_CONSTRAINTS} ({detail})")
