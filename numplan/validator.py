"""Structural validation of raw phone strings against their declared country."""
from __future__ import annotations

import logging
from typing import Iterable, List

from .dialcode import digits_only, resolve_dial_code
from .models import (
    ErrorKind,
    RawRecord,
    RecordError,
    ValidatedRecord,
    ValidationOutcome,
    ValidationReport,
)
from .rules import canonical_country, countries_for_dial_code, lookup

LOGGER = logging.getLogger(__name__)

MIN_DIGITS = 8
GENERIC_LENGTH_RANGE = (8, 15)


def validate(raw_phone: str, country_label: str) -> ValidationOutcome:
    """Decide whether ``raw_phone`` is a well formed E.164 number for ``country_label``."""

    if not raw_phone or not isinstance(raw_phone, str) or not raw_phone.startswith("+"):
        return ValidationOutcome.rejected(ErrorKind.NOT_E164_PREFIXED)

    body = raw_phone[1:]
    if not body or not body.isdigit() or not body.isascii():
        return ValidationOutcome.rejected(ErrorKind.INVALID_CHARACTERS)

    digits = digits_only(raw_phone)
    if len(digits) < MIN_DIGITS:
        return ValidationOutcome.rejected(ErrorKind.TOO_SHORT)

    split = resolve_dial_code(digits)
    if split is None:
        return ValidationOutcome.rejected(ErrorKind.DIAL_CODE_UNRESOLVABLE)

    country = canonical_country(country_label)
    if country not in countries_for_dial_code(split.dial_code):
        return ValidationOutcome.rejected(ErrorKind.COUNTRY_MISMATCH)

    rule = lookup(country)
    if rule is not None:
        length_ok = rule.accepts_length(len(digits))
    else:
        length_ok = GENERIC_LENGTH_RANGE[0] <= len(digits) <= GENERIC_LENGTH_RANGE[1]
    if not length_ok:
        return ValidationOutcome.rejected(ErrorKind.INVALID_LENGTH)

    if rule is not None and rule.leading_digits and split.national_number[:1] not in rule.leading_digits:
        return ValidationOutcome.rejected(ErrorKind.INVALID_NATIONAL_PREFIX)

    return ValidationOutcome.ok(f"+{digits}")


def validate_records(records: Iterable[RawRecord]) -> ValidationReport:
    """Validate every record, collecting failures instead of aborting.

    Duplicate numbers are kept; see :func:`dedupe_by_e164`.
    """

    report = ValidationReport()
    for record in records:
        outcome = validate(record.phone, record.country)
        if outcome.e164 is not None:
            report.valid.append(ValidatedRecord(record=record, e164=outcome.e164))
            continue
        LOGGER.debug("Rejected %s for %s: %s", record.phone, record.country, outcome.reason.value)
        report.errors.append(RecordError(phone=record.phone, country=record.country, reason=outcome.reason))

    LOGGER.info("Validated %s records: %s valid, %s rejected", len(report.valid) + len(report.errors), len(report.valid), len(report.errors))
    return report


def dedupe_by_e164(validated: Iterable[ValidatedRecord]) -> List[ValidatedRecord]:
    """Keep the first record for each E.164 value."""

    seen = set()
    unique: List[ValidatedRecord] = []
    for item in validated:
        if item.e164 in seen:
            continue
        seen.add(item.e164)
        unique.append(item)
    return unique


__all__ = ["validate", "validate_records", "dedupe_by_e164", "GENERIC_LENGTH_RANGE"]
