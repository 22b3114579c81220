"""Randomized, collision-free phone number synthesis per country.

Candidates are drawn from each country's numbering plan and accepted only
when neither the full number nor its prefix block has been used in the
run. Output is non-deterministic unless a seeded ``random.Random`` is
passed in.
"""
from __future__ import annotations

import logging
import random
from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional

from .models import GeneratedNumber, NormalizedRecord, UniquenessSets
from .normalizer import extract_prefix
from .plans import plan_for, synthesize_unruled
from .rules import canonical_country, dial_code_for, lookup

LOGGER = logging.getLogger(__name__)

DEFAULT_ATTEMPTS_PER_NUMBER = 100


def generate(
    country: str,
    count: int,
    uniqueness: UniquenessSets,
    *,
    rng: Optional[random.Random] = None,
    attempts_per_number: int = DEFAULT_ATTEMPTS_PER_NUMBER,
) -> List[str]:
    """Synthesize up to ``count`` numbers for ``country``.

    Gives up after ``count * attempts_per_number`` draws and returns what it
    has; plans with few prefix blocks run out quickly.
    """

    if count <= 0:
        return []
    rng = rng or random.Random()
    rule = lookup(country)
    dial_code = dial_code_for(country)
    if dial_code is None:
        LOGGER.warning("No dial code known for %r; nothing generated", country)
        return []

    plan = plan_for(rule) if rule is not None else None
    generated: List[str] = []
    max_attempts = count * attempts_per_number
    attempts = 0
    while len(generated) < count and attempts < max_attempts:
        attempts += 1
        if plan is not None and rule is not None:
            candidate = plan.synthesize(rule, rng)
        else:
            candidate = synthesize_unruled(dial_code, rng)
        prefix = extract_prefix(candidate, rule)
        if uniqueness.claim(candidate, prefix):
            generated.append(candidate)

    if len(generated) < count:
        LOGGER.warning(
            "Generated %s of %s numbers for %s after %s attempts",
            len(generated),
            count,
            canonical_country(country),
            attempts,
        )
    else:
        LOGGER.debug("Generated %s numbers for %s in %s attempts", count, canonical_country(country), attempts)
    return generated


def generate_batch(
    country_counts: Mapping[str, int],
    uniqueness: Optional[UniquenessSets] = None,
    *,
    exclude: Iterable[str] = (),
    rng: Optional[random.Random] = None,
    attempts_per_number: int = DEFAULT_ATTEMPTS_PER_NUMBER,
) -> List[GeneratedNumber]:
    """Generate numbers for several countries against one shared pair of uniqueness sets."""

    if uniqueness is None:
        uniqueness = UniquenessSets()
    uniqueness.reserve(exclude)
    rng = rng or random.Random()

    batch: List[GeneratedNumber] = []
    for country, count in country_counts.items():
        if count <= 0:
            continue
        name = canonical_country(country)
        for number in generate(country, count, uniqueness, rng=rng, attempts_per_number=attempts_per_number):
            batch.append(GeneratedNumber(country=name, e164=number))
    return batch


def count_by_country(records: Iterable[NormalizedRecord]) -> Dict[str, int]:
    """Count records per canonical country, in first-seen order."""

    counts: Counter[str] = Counter()
    for item in records:
        counts[canonical_country(item.record.country)] += 1
    return dict(counts)


__all__ = ["DEFAULT_ATTEMPTS_PER_NUMBER", "count_by_country", "generate", "generate_batch"]
