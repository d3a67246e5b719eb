from __future__ import annotations

from eitherway.either import (
    Either,
    Failure,
    Success,
    either_from_awaitable,
    either_from_nullable,
    either_from_try,
    failures,
    first_success,
    is_failure,
    is_success,
    sequence_eithers,
    successes,
    successes_or,
    traverse_eithers,
)
from eitherway.maybe import (
    ABSENT,
    Absent,
    Maybe,
    Present,
    filter_present,
    first_present,
    is_absent,
    is_present,
    maybe_from_awaitable,
    maybe_from_nullable,
    maybe_from_try,
    presents,
    sequence_maybes,
    traverse_maybes,
)

__all__ = [
    # Maybe types
    "Maybe",
    "Present",
    "Absent",
    "ABSENT",
    "is_present",
    "is_absent",
    "maybe_from_nullable",
    "maybe_from_try",
    "maybe_from_awaitable",
    "presents",
    "sequence_maybes",
    "traverse_maybes",
    "first_present",
    "filter_present",
    # Either types
    "Either",
    "Success",
    "Failure",
    "is_success",
    "is_failure",
    "either_from_nullable",
    "either_from_try",
    "either_from_awaitable",
    "successes",
    "failures",
    "successes_or",
    "sequence_eithers",
    "traverse_eithers",
    "first_success",
]
