"""Country-rule-driven phone validation, decomposition, and number generation."""

from . import models  # noqa: F401
from .generator import count_by_country, generate, generate_batch
from .grouping import group_by_prefix
from .models import (
    Contact,
    ContactGroup,
    Diagnostics,
    ErrorKind,
    GeneratedNumber,
    NormalizedPhone,
    RawRecord,
    UniquenessSets,
    ValidationOutcome,
)
from .normalizer import decompose, extract_prefix
from .rules import CountryRule, lookup
from .validator import validate, validate_records

__all__ = [
    "Contact",
    "ContactGroup",
    "CountryRule",
    "Diagnostics",
    "ErrorKind",
    "GeneratedNumber",
    "NormalizedPhone",
    "RawRecord",
    "UniquenessSets",
    "ValidationOutcome",
    "count_by_country",
    "decompose",
    "extract_prefix",
    "generate",
    "generate_batch",
    "group_by_prefix",
    "lookup",
    "validate",
    "validate_records",
    "ingestion",
    "orchestrator",
]
