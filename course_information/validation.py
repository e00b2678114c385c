"""
Course Information Service — Query Parameter Validation
=========================================================

What:  Checks applied to query parameters before any service call.
How:   Each helper either returns the cleaned value or raises
       InvalidParameterError (→ 400 via the global handler).
Who:   Route handlers; JsonCatalogService reuses `parse_time_slot`.

Rules:
    - Required strings: missing, empty or whitespace-only → 400
    - "At least one of" pairs (courseId/crn, timeSlot/crn): both empty → 400
    - creditHours: must be within 1..4
    - timeSlot: "HH:MM AM - HH:MM PM" with the end after the start
"""

import re
from datetime import datetime, time
from typing import Optional, Tuple

from course_information.exceptions import InvalidParameterError

MIN_CREDIT_HOURS = 1
MAX_CREDIT_HOURS = 4

_TIME_SLOT_SEPARATOR = re.compile(r"\s*-\s*")
_TIME_FORMAT = "%I:%M %p"


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Strip surrounding whitespace; empty strings become None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def require_param(name: str, value: Optional[str]) -> str:
    """Return the stripped value of a required string parameter."""
    cleaned = clean_optional(value)
    if cleaned is None:
        raise InvalidParameterError(
            message=f"Query parameter '{name}' is required and must not be empty",
            parameter=name,
        )
    return cleaned


def require_any_param(
    first_name: str,
    first: Optional[str],
    second_name: str,
    second: Optional[str],
) -> Tuple[Optional[str], Optional[str]]:
    """
    Clean two optional parameters of which at least one must be present.

    Returns both cleaned values (either may be None, never both).
    """
    first_clean = clean_optional(first)
    second_clean = clean_optional(second)
    if first_clean is None and second_clean is None:
        raise InvalidParameterError(
            message=f"Provide at least one of '{first_name}' or '{second_name}'",
            context={"parameters": [first_name, second_name]},
        )
    return first_clean, second_clean


def validate_credit_hours(credit_hours: Optional[int]) -> int:
    if credit_hours is None:
        raise InvalidParameterError(
            message="Query parameter 'creditHours' is required",
            parameter="creditHours",
        )
    if not MIN_CREDIT_HOURS <= credit_hours <= MAX_CREDIT_HOURS:
        raise InvalidParameterError(
            message=(
                f"creditHours must be between {MIN_CREDIT_HOURS} and "
                f"{MAX_CREDIT_HOURS}, got {credit_hours}"
            ),
            parameter="creditHours",
        )
    return credit_hours


def parse_clock_time(value: str) -> time:
    """Parse '10:00 AM' / '1:25 pm' into a time. Raises ValueError on bad input."""
    return datetime.strptime(value.strip().upper(), _TIME_FORMAT).time()


def parse_time_slot(time_slot: str) -> Tuple[time, time]:
    """
    Parse a time slot range like '10:00 AM - 11:15 AM'.

    Returns:
        (start, end) as datetime.time values

    Raises:
        InvalidParameterError: malformed slot or end not after start
    """
    parts = _TIME_SLOT_SEPARATOR.split(time_slot.strip())
    if len(parts) != 2:
        raise InvalidParameterError(
            message="timeSlot must look like '10:00 AM - 11:15 AM'",
            parameter="timeSlot",
            context={"value": time_slot},
        )
    try:
        start, end = parse_clock_time(parts[0]), parse_clock_time(parts[1])
    except ValueError:
        raise InvalidParameterError(
            message="timeSlot must look like '10:00 AM - 11:15 AM'",
            parameter="timeSlot",
            context={"value": time_slot},
        )
    if end <= start:
        raise InvalidParameterError(
            message="timeSlot must end after it starts",
            parameter="timeSlot",
            context={"value": time_slot},
        )
    return start, end
