"""Rejection values returned by the availability core.

Every caller-facing availability operation answers with either a value or one
of these violations. They are expected, user-triggered outcomes, so they are
returned rather than raised; the service layer converts them into
`AvailabilityValidationException` at the API boundary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class Violation:
    """Base type for every availability rejection."""

    code: ClassVar[str] = "AVAILABILITY_VIOLATION"

    @property
    def message(self) -> str:
        return "Availability change rejected"

    def to_details(self) -> Dict[str, Any]:
        details = asdict(self)
        details["code"] = self.code
        return details


@dataclass(frozen=True)
class InvalidFormat(Violation):
    value: str

    code: ClassVar[str] = "INVALID_FORMAT"

    @property
    def message(self) -> str:
        return f"Time must be in HH:MM format (got {self.value!r})"


@dataclass(frozen=True)
class InvalidRange(Violation):
    index: int

    code: ClassVar[str] = "INVALID_RANGE"

    @property
    def message(self) -> str:
        return f"Block {self.index + 1}: End time must be after start time"


@dataclass(frozen=True)
class BlockTooShort(Violation):
    index: int
    minutes: int
    minimum: int = 15

    code: ClassVar[str] = "BLOCK_TOO_SHORT"

    @property
    def message(self) -> str:
        return f"Block {self.index + 1}: Minimum block duration is {self.minimum} minutes"


@dataclass(frozen=True)
class TooManyBlocks(Violation):
    count: int
    limit: int = 5

    code: ClassVar[str] = "TOO_MANY_BLOCKS"

    @property
    def message(self) -> str:
        return f"Maximum {self.limit} time blocks per day allowed"


@dataclass(frozen=True)
class Overlap(Violation):
    index_a: int
    index_b: int

    code: ClassVar[str] = "OVERLAP"

    @property
    def message(self) -> str:
        return "Time blocks cannot overlap"


@dataclass(frozen=True)
class InvalidArgument(Violation):
    reason: str

    code: ClassVar[str] = "INVALID_ARGUMENT"

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class PersistenceFailure(Violation):
    reason: str = "Changes not saved, please retry"

    code: ClassVar[str] = "PERSISTENCE_FAILURE"

    @property
    def message(self) -> str:
        return self.reason
