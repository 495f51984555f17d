"""
Registrant record, canonical fields, and fetch-status schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class CanonicalField(str, Enum):
    """Normalized registrant attributes, in positional-fallback order."""
    NAME = "name"
    BIRTH_INFO = "birth_info"
    FATHER_NAME = "father_name"
    MOTHER_NAME = "mother_name"
    PHONE = "phone"
    ADDRESS = "address"

    @property
    def fallback_index(self) -> int:
        """Column used when no header matched: the field's declared position."""
        return list(CanonicalField).index(self)


@dataclass(frozen=True)
class Registrant:
    """One normalized row of the registration sheet."""
    sequence_number: int
    name: str = ""
    birth_info: str = ""
    father_name: str = ""
    mother_name: str = ""
    phone: str = ""
    address: str = ""

    def as_dict(self) -> dict:
        return {
            "sequence_number": self.sequence_number,
            "name": self.name,
            "birth_info": self.birth_info,
            "father_name": self.father_name,
            "mother_name": self.mother_name,
            "phone": self.phone,
            "address": self.address,
        }


# ---------------------------------------------------------------------------
# Fetch status: exactly one is current at any time
# ---------------------------------------------------------------------------

class StatusKind(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Loading:
    kind = StatusKind.LOADING


@dataclass(frozen=True)
class Success:
    registrants: tuple[Registrant, ...]
    timestamp: dt.datetime
    kind = StatusKind.SUCCESS


@dataclass(frozen=True)
class Failure:
    message: str
    timestamp: dt.datetime
    kind = StatusKind.ERROR


FetchStatus = Union[Loading, Success, Failure]


@dataclass(frozen=True)
class RefreshSnapshot:
    """What the presentation layer reads: the four values the page renders."""
    loading: bool
    error: Optional[str]
    registrants: tuple[Registrant, ...] = field(default_factory=tuple)
    last_updated: Optional[dt.datetime] = None

    @property
    def registered_count(self) -> int:
        return len(self.registrants)

    @property
    def can_export(self) -> bool:
        """Report download is offered only when idle and there is something to print."""
        return not self.loading and self.registered_count > 0


def quota_remaining(registered_count: int, quota: int) -> int:
    """Seats left; never negative even when the sheet is over-subscribed."""
    return max(0, quota - registered_count)
