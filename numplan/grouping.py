"""Assignment of batch-calling contacts to generated originating numbers by prefix."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .dialcode import split_e164
from .models import Contact, ContactGroup, Diagnostics, GeneratedNumber
from .normalizer import extract_prefix

LOGGER = logging.getLogger(__name__)


def _with_plus(number: str) -> str:
    number = number.strip()
    return number if number.startswith("+") else f"+{number}"


def extract_country_code(phone_number: Optional[str]) -> Optional[str]:
    """Return the dial code of ``phone_number``, or ``None`` if it cannot be resolved."""

    if not phone_number or not isinstance(phone_number, str):
        return None
    split = split_e164(phone_number)
    return split.dial_code if split is not None else None


def extract_prefix_for_grouping(phone_number: Optional[str]) -> Optional[str]:
    if not phone_number or not isinstance(phone_number, str):
        return None
    return extract_prefix(_with_plus(phone_number))


def find_matching_generated_number(
    phone_number: str,
    generated: Sequence[GeneratedNumber],
) -> Optional[GeneratedNumber]:
    """Pick the generated number sharing the contact's prefix block.

    Falls back to the first generated number with the same dial code.
    """

    if not phone_number or not generated:
        return None
    contact_prefix = extract_prefix_for_grouping(phone_number)
    if contact_prefix is None:
        return None

    for candidate in generated:
        if extract_prefix_for_grouping(candidate.e164) == contact_prefix:
            return candidate

    dial_code = extract_country_code(phone_number)
    if dial_code is None:
        return None
    for candidate in generated:
        if extract_country_code(candidate.e164) == dial_code:
            return candidate
    return None


def group_by_prefix(
    contacts: Iterable[Contact],
    generated: Sequence[GeneratedNumber],
    diagnostics: Optional[Diagnostics] = None,
) -> List[ContactGroup]:
    """Group contacts under the generated number they should be called from.

    Contacts without any compatible generated number are left out of every
    group; pass ``diagnostics`` to collect them.
    """

    groups: Dict[str, ContactGroup] = {}
    dropped = 0
    for contact in contacts:
        if not contact.phone_number:
            continue
        phone_number = _with_plus(contact.phone_number)
        match = find_matching_generated_number(phone_number, generated)
        if match is None:
            dropped += 1
            if diagnostics is not None:
                diagnostics.drop_contact(contact, f"No generated number compatible with {phone_number}")
            continue

        originating = _with_plus(match.e164)
        group = groups.get(originating)
        if group is None:
            group = ContactGroup(originating_number=originating, nickname=match.nickname or match.country or None)
            groups[originating] = group
        group.contacts.append(Contact(phone_number=phone_number, variables=dict(contact.variables), row_index=contact.row_index))

    if dropped:
        LOGGER.warning("%s contacts matched no generated number and were left out", dropped)
    return list(groups.values())


__all__ = [
    "extract_country_code",
    "extract_prefix_for_grouping",
    "find_matching_generated_number",
    "group_by_prefix",
]
