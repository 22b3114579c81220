"""Per-country numbering plans.

Every supported plan knows how to split a national number into its
structural parts, how to synthesize a fresh candidate, and which leading
segment identifies its prefix block for deduplication and grouping. Plans
are selected by dial code from :data:`PLANS`; adding a country means adding
one plan class and one table entry.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .rules import COUNTRY_RULES, CountryRule

_AREA_CANDIDATE = re.compile(r"^[2-9]\d+$")


@dataclass(frozen=True)
class PlanSplit:
    area_code: str
    local_number: str
    mobile_indicator: str = ""
    degraded: bool = False


def random_digits(rng: random.Random, length: int, no_leading_zero: bool = True) -> str:
    """Return ``length`` random digits; the first one is redrawn from 1-9 when it would be 0."""

    digits = []
    for index in range(length):
        digit = rng.randint(0, 9)
        if index == 0 and no_leading_zero and digit == 0:
            digit = rng.randint(1, 9)
        digits.append(str(digit))
    return "".join(digits)


class NumberingPlan:
    """Fallback plan: no area concept, the whole national number is local."""

    kind = "generic"
    prefix_digits = 2

    def split(self, national: str) -> PlanSplit:
        return PlanSplit(area_code="", local_number=national)

    def prefix(self, dial_code: str, national: str) -> str:
        parts = self.split(national)
        if parts.area_code and not parts.degraded:
            return f"{dial_code}{parts.mobile_indicator}{parts.area_code}"
        return f"{dial_code}{national[: self.prefix_digits]}"

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        national_length = max(rule.min_length - len(rule.dial_code), 1)
        return f"+{rule.dial_code}{random_digits(rng, national_length)}"


class NanpPlan(NumberingPlan):
    """USA, Canada and the rest of dial code 1: NPA (3) + subscriber (7)."""

    kind = "nanp"

    def split(self, national: str) -> PlanSplit:
        if len(national) != 10:
            return PlanSplit(area_code="", local_number=national, degraded=True)
        return PlanSplit(area_code=national[:3], local_number=national[3:])

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        if rule.area_codes:
            npa = rng.choice(rule.area_codes)
        else:
            npa = self._n_xx(rng)
        exchange = self._n_xx(rng)
        return f"+{rule.dial_code}{npa}{exchange}{random_digits(rng, 4, no_leading_zero=False)}"

    @staticmethod
    def _n_xx(rng: random.Random) -> str:
        first = rng.randint(2, 9)
        middle = rng.randint(0, 9)
        last = rng.randint(0, 9)
        # N11 codes are reserved for service numbers
        if middle == 1 and last == 1:
            middle = rng.choice((0, 2, 3, 4, 5, 6, 7, 8, 9))
        return f"{first}{middle}{last}"


class ArgentinaPlan(NumberingPlan):
    """+54 [9] area (2-4) + local, ten national digits once the 9 is removed."""

    kind = "argentina"
    area_lengths = (4, 3, 2)
    default_area_codes = ("11", "221", "341", "351", "261", "381", "223", "299")

    def split(self, national: str) -> PlanSplit:
        indicator = ""
        rest = national
        if len(rest) == 11 and rest.startswith("9"):
            indicator, rest = "9", rest[1:]
        elif len(rest) != 10:
            return PlanSplit(area_code="", local_number=national, degraded=True)

        if rest.startswith("11"):
            return PlanSplit(area_code="11", local_number=rest[2:], mobile_indicator=indicator)
        for length in self.area_lengths:
            candidate = rest[:length]
            if _AREA_CANDIDATE.match(candidate):
                return PlanSplit(area_code=candidate, local_number=rest[length:], mobile_indicator=indicator)
        return PlanSplit(area_code="", local_number=rest, mobile_indicator=indicator, degraded=True)

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        area = rng.choice(rule.area_codes or self.default_area_codes)
        local = random_digits(rng, 10 - len(area))
        return f"+{rule.dial_code}{rule.mobile_indicator or '9'}{area}{local}"


class MexicoPlan(NumberingPlan):
    """+52 area (2 or 3, longest listed match) + local, ten national digits."""

    kind = "mexico"

    def __init__(self, area_codes: Tuple[str, ...] = ()) -> None:
        self._area_codes = frozenset(area_codes)

    def split(self, national: str) -> PlanSplit:
        if len(national) != 10:
            return PlanSplit(area_code="", local_number=national, degraded=True)
        for length in (3, 2):
            candidate = national[:length]
            if candidate in self._area_codes:
                return PlanSplit(area_code=candidate, local_number=national[length:])
        return PlanSplit(area_code=national[:2], local_number=national[2:])

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        area = rng.choice(rule.area_codes or ("55", "33", "81"))
        return f"+{rule.dial_code}{area}{random_digits(rng, 10 - len(area))}"


class SpainPlan(NumberingPlan):
    """+34 and nine digits; mobiles have no area code."""

    kind = "spain"
    mobile_leading_digits = "6789"

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        first = rng.choice(rule.leading_digits or self.mobile_leading_digits)
        return f"+{rule.dial_code}{first}{random_digits(rng, 8)}"


class ColombiaPlan(NumberingPlan):
    """+57 3XX mobile block + seven digits."""

    kind = "colombia"
    mobile_blocks = (
        "300", "301", "310", "311", "312", "313", "314", "315", "316",
        "317", "318", "319", "320", "321", "322", "323", "350", "351",
    )

    def split(self, national: str) -> PlanSplit:
        if len(national) != 10 or not national.startswith("3"):
            return PlanSplit(area_code="", local_number=national, degraded=True)
        return PlanSplit(area_code=national[:3], local_number=national[3:])

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        return f"+{rule.dial_code}{rng.choice(self.mobile_blocks)}{random_digits(rng, 7)}"


class LeadingNinePlan(NumberingPlan):
    """Chile and Peru mobiles: 9 + eight digits."""

    kind = "leading_nine"

    def split(self, national: str) -> PlanSplit:
        if len(national) == 9 and national.startswith("9"):
            return PlanSplit(area_code="9", local_number=national[1:])
        if national.startswith("9"):
            return PlanSplit(area_code="9", local_number=national[1:], degraded=True)
        return PlanSplit(area_code="", local_number=national, degraded=True)

    def prefix(self, dial_code: str, national: str) -> str:
        # The area is always 9, so the block is the 9 plus two operator digits.
        return f"{dial_code}{national[:3]}"

    def synthesize(self, rule: CountryRule, rng: random.Random) -> str:
        return f"+{rule.dial_code}{rule.mobile_indicator or '9'}{random_digits(rng, 8)}"


GENERIC_PLAN = NumberingPlan()

PLANS: Dict[str, NumberingPlan] = {
    "1": NanpPlan(),
    "34": SpainPlan(),
    "51": LeadingNinePlan(),
    "52": MexicoPlan(COUNTRY_RULES["Mexico"].area_codes),
    "54": ArgentinaPlan(),
    "56": LeadingNinePlan(),
    "57": ColombiaPlan(),
}


def plan_for(rule: Optional[CountryRule]) -> NumberingPlan:
    """Return the plan matching ``rule``'s dial code, or the generic plan."""

    if rule is None:
        return GENERIC_PLAN
    return PLANS.get(rule.dial_code, GENERIC_PLAN)


def synthesize_unruled(dial_code: str, rng: random.Random) -> str:
    """Candidate for a country known only by its dial code: 8-12 random digits."""

    return f"+{dial_code}{random_digits(rng, rng.randint(8, 12))}"


__all__ = [
    "GENERIC_PLAN",
    "NumberingPlan",
    "PLANS",
    "PlanSplit",
    "plan_for",
    "random_digits",
    "synthesize_unruled",
]
