"""Decomposition of validated E.164 numbers into dial code, area code, and subscriber number."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .dialcode import digits_only, split_e164
from .models import Diagnostics, NormalizedPhone, NormalizedRecord, ValidatedRecord
from .plans import GENERIC_PLAN, plan_for
from .rules import CountryRule, lookup, rule_for_dial_code

LOGGER = logging.getLogger(__name__)


def decompose(e164: str, country_label: str, diagnostics: Optional[Diagnostics] = None) -> NormalizedPhone:
    """Split ``e164`` following the structural plan of ``country_label``.

    Never raises: numbers that do not fit their plan come back as a
    best-effort split flagged ``degraded`` (and are reported to
    ``diagnostics`` when one is supplied).
    """

    full_e164 = e164 if e164.startswith("+") else f"+{e164}"
    split = split_e164(full_e164)
    if split is None:
        phone = NormalizedPhone(
            country_code="",
            area_code="",
            local_number=digits_only(full_e164),
            full_e164=full_e164,
            degraded=True,
        )
        _report_degraded(phone, country_label, diagnostics)
        return phone

    rule = lookup(country_label)
    if rule is None:
        return NormalizedPhone(
            country_code=split.dial_code,
            area_code="",
            local_number=split.national_number,
            full_e164=full_e164,
        )

    parts = plan_for(rule).split(split.national_number)
    phone = NormalizedPhone(
        country_code=split.dial_code,
        area_code=parts.area_code,
        local_number=parts.local_number,
        full_e164=full_e164,
        mobile_indicator=parts.mobile_indicator,
        degraded=parts.degraded,
    )
    if phone.degraded:
        _report_degraded(phone, country_label, diagnostics)
    return phone


def _report_degraded(phone: NormalizedPhone, country_label: str, diagnostics: Optional[Diagnostics]) -> None:
    LOGGER.debug("Best-effort split for %s (%s)", phone.full_e164, country_label)
    if diagnostics is not None:
        diagnostics.degrade(phone.full_e164, f"{phone.full_e164} does not match the {country_label or 'unknown'} numbering plan")


def extract_prefix(e164: str, rule: Optional[CountryRule] = None) -> Optional[str]:
    """Return the dial-code-qualified prefix block used for dedup and grouping.

    When ``rule`` is omitted the plan is chosen from the number's own dial
    code. Returns ``None`` only when no dial code can be resolved.
    """

    split = split_e164(e164)
    if split is None:
        return None
    if rule is None:
        rule = rule_for_dial_code(split.dial_code)
    plan = plan_for(rule) if rule is not None else GENERIC_PLAN
    return plan.prefix(split.dial_code, split.national_number)


def normalize_records(
    validated: Iterable[ValidatedRecord],
    diagnostics: Optional[Diagnostics] = None,
) -> List[NormalizedRecord]:
    normalized: List[NormalizedRecord] = []
    for item in validated:
        phone = decompose(item.e164, item.record.country, diagnostics)
        normalized.append(NormalizedRecord(record=item.record, e164=item.e164, phone=phone))
    return normalized


__all__ = ["decompose", "extract_prefix", "normalize_records"]
