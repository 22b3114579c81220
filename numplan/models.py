"""Data models shared by the validator, decomposer, generator, and batch grouper."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set


# --- Input Models ---

@dataclass(slots=True)
class RawRecord:
    """One contact row as supplied by the spreadsheet loader."""

    phone: str
    name: str = ""
    email: str = ""
    region: str = ""
    country: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def as_row(self) -> Dict[str, Any]:
        return {
            "phone": self.phone,
            "name": self.name,
            "email": self.email,
            "region": self.region,
            "pais": self.country,
        }


# --- Validation Models ---

class ErrorKind(str, Enum):
    """Reasons a phone number is rejected for its declared country."""

    NOT_E164_PREFIXED = "NotE164Prefixed"
    INVALID_CHARACTERS = "InvalidCharacters"
    TOO_SHORT = "TooShort"
    DIAL_CODE_UNRESOLVABLE = "DialCodeUnresolvable"
    COUNTRY_MISMATCH = "CountryMismatch"
    INVALID_LENGTH = "InvalidLength"
    INVALID_NATIONAL_PREFIX = "InvalidNationalPrefix"


@dataclass(frozen=True)
class ValidationOutcome:
    """Tagged validation result: either ``e164`` or ``reason`` is set."""

    valid: bool
    e164: Optional[str] = None
    reason: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, e164: str) -> "ValidationOutcome":
        return cls(valid=True, e164=e164)

    @classmethod
    def rejected(cls, reason: ErrorKind) -> "ValidationOutcome":
        return cls(valid=False, reason=reason)


@dataclass(slots=True)
class ValidatedRecord:
    record: RawRecord
    e164: str


@dataclass(slots=True)
class RecordError:
    """A rejected record kept alongside the valid ones."""

    phone: str
    country: str
    reason: ErrorKind

    def describe(self) -> str:
        return f"{self.phone} ({self.country}): {self.reason.value}"


@dataclass
class ValidationReport:
    valid: List[ValidatedRecord] = field(default_factory=list)
    errors: List[RecordError] = field(default_factory=list)


# --- Decomposition Models ---

@dataclass(frozen=True)
class NormalizedPhone:
    """A valid E.164 number split into its structural parts.

    ``country_code + mobile_indicator + area_code + local_number`` always
    reproduces the digits of ``full_e164``.
    """

    country_code: str
    area_code: str
    local_number: str
    full_e164: str
    mobile_indicator: str = ""
    degraded: bool = False

    @property
    def digits(self) -> str:
        return f"{self.country_code}{self.mobile_indicator}{self.area_code}{self.local_number}"


@dataclass(slots=True)
class NormalizedRecord:
    record: RawRecord
    e164: str
    phone: NormalizedPhone

    def as_row(self) -> Dict[str, Any]:
        row = self.record.as_row()
        row.update(
            {
                "country_code": self.phone.country_code,
                "area_code": self.phone.area_code,
                "local_number": self.phone.local_number,
                "full_e164": self.phone.full_e164,
            }
        )
        return row


# --- Generation Models ---

@dataclass(slots=True)
class GeneratedNumber:
    country: str
    e164: str
    nickname: Optional[str] = None


@dataclass
class UniquenessSets:
    """Full-number and prefix sets shared across one generation run.

    The caller owns the instance; :meth:`claim` is the only mutation the
    generator performs.
    """

    used_full_numbers: Set[str] = field(default_factory=set)
    used_prefixes: Set[str] = field(default_factory=set)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def reserve(self, numbers: Iterable[str]) -> None:
        """Mark existing numbers as taken without claiming their prefixes."""

        with self._lock:
            self.used_full_numbers.update(numbers)

    def claim(self, number: str, prefix: Optional[str]) -> bool:
        """Record ``number`` and ``prefix`` unless either is already taken."""

        with self._lock:
            if number in self.used_full_numbers:
                return False
            if prefix is not None and prefix in self.used_prefixes:
                return False
            self.used_full_numbers.add(number)
            if prefix is not None:
                self.used_prefixes.add(prefix)
            return True


# --- Batch Calling Models ---

@dataclass(slots=True)
class Contact:
    """A batch-calling contact with its custom template variables."""

    phone_number: str
    variables: Dict[str, str] = field(default_factory=dict)
    row_index: Optional[int] = None


@dataclass
class ContactGroup:
    originating_number: str
    nickname: Optional[str] = None
    contacts: List[Contact] = field(default_factory=list)


@dataclass
class Diagnostics:
    """Items the core dropped or degraded instead of failing on."""

    messages: List[str] = field(default_factory=list)
    dropped_contacts: List[Contact] = field(default_factory=list)
    degraded_numbers: List[str] = field(default_factory=list)

    def add(self, message: str) -> None:
        self.messages.append(message)

    def drop_contact(self, contact: Contact, message: str) -> None:
        self.dropped_contacts.append(contact)
        self.add(message)

    def degrade(self, e164: str, message: str) -> None:
        self.degraded_numbers.append(e164)
        self.add(message)


__all__ = [
    "Contact",
    "ContactGroup",
    "Diagnostics",
    "ErrorKind",
    "GeneratedNumber",
    "NormalizedPhone",
    "NormalizedRecord",
    "RawRecord",
    "RecordError",
    "UniquenessSets",
    "ValidatedRecord",
    "ValidationOutcome",
    "ValidationReport",
]
