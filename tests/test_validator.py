import pytest

from numplan.models import ErrorKind, RawRecord
from numplan.validator import dedupe_by_e164, validate, validate_records


@pytest.mark.parametrize(
    ("phone", "country"),
    [
        ("+5491122334455", "Argentina"),
        ("+34612345678", "España"),
        ("+573001234567", "Colombia"),
        ("+525512345678", "México"),
        ("+12025550123", "Estados Unidos"),
        ("+12025550123", "Canada"),
        ("+18095551234", "República Dominicana"),
        ("+56912345678", "Chile"),
        ("+51987654321", "Perú"),
        ("+59171234567", "Bolivia"),
        ("+584121234567", "Venezuela"),
    ],
)
def test_valid_numbers(phone: str, country: str) -> None:
    outcome = validate(phone, country)
    assert outcome.valid
    assert outcome.e164 == phone
    assert outcome.reason is None


@pytest.mark.parametrize(
    ("phone", "country", "reason"),
    [
        ("5712345", "Colombia", ErrorKind.NOT_E164_PREFIXED),
        ("", "Colombia", ErrorKind.NOT_E164_PREFIXED),
        ("+57 300 123 4567", "Colombia", ErrorKind.INVALID_CHARACTERS),
        ("++573001234567", "Colombia", ErrorKind.INVALID_CHARACTERS),
        ("+57300abc4567", "Colombia", ErrorKind.INVALID_CHARACTERS),
        ("+5730012", "Colombia", ErrorKind.TOO_SHORT),
        ("+573001234", "Colombia", ErrorKind.DIAL_CODE_UNRESOLVABLE),
        ("+573001234567", "Mexico", ErrorKind.COUNTRY_MISMATCH),
        ("+5491122334455", "Narnia", ErrorKind.COUNTRY_MISMATCH),
        ("+5730012345678", "Colombia", ErrorKind.INVALID_LENGTH),
        ("+12025550123", "USA / Canadá", None),
        ("+34012345678", "España", ErrorKind.INVALID_NATIONAL_PREFIX),
    ],
)
def test_rejections(phone: str, country: str, reason) -> None:
    outcome = validate(phone, country)
    if reason is None:
        assert outcome.valid
        return
    assert not outcome.valid
    assert outcome.e164 is None
    assert outcome.reason is reason


def test_unruled_country_uses_generic_length_bounds() -> None:
    assert validate("+5841212345678901", "Venezuela").reason is ErrorKind.INVALID_LENGTH


def test_validate_records_accumulates_errors_and_keeps_duplicates() -> None:
    records = [
        RawRecord(phone="+573001234567", name="Ana", country="Colombia"),
        RawRecord(phone="573001234567", name="Bad", country="Colombia"),
        RawRecord(phone="+573001234567", name="Ana again", country="Colombia"),
        RawRecord(phone="+34612345678", name="Luis", country="España"),
    ]

    report = validate_records(records)

    assert [item.e164 for item in report.valid] == ["+573001234567", "+573001234567", "+34612345678"]
    assert len(report.errors) == 1
    assert report.errors[0].reason is ErrorKind.NOT_E164_PREFIXED
    assert "NotE164Prefixed" in report.errors[0].describe()

    unique = dedupe_by_e164(report.valid)
    assert [item.record.name for item in unique] == ["Ana", "Luis"]
