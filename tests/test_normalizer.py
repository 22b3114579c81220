import pytest

from numplan.dialcode import digits_only
from numplan.models import Diagnostics, RawRecord, ValidatedRecord
from numplan.normalizer import decompose, extract_prefix, normalize_records
from numplan.rules import lookup
from numplan.validator import validate


def test_argentina_mobile_strips_indicator_and_keeps_buenos_aires_area() -> None:
    phone = decompose("+5491122334455", "Argentina")

    assert phone.country_code == "54"
    assert phone.mobile_indicator == "9"
    assert phone.area_code == "11"
    assert phone.local_number == "22334455"
    assert phone.full_e164 == "+5491122334455"
    assert not phone.degraded


def test_argentina_without_indicator_prefers_longest_area_candidate() -> None:
    phone = decompose("+543511234567", "Argentina")

    assert phone.mobile_indicator == ""
    assert phone.area_code == "3511"
    assert phone.local_number == "234567"


def test_argentina_unexpected_length_degrades() -> None:
    phone = decompose("+54911223344", "Argentina")

    assert phone.degraded
    assert phone.area_code == ""
    assert phone.local_number == "911223344"


def test_nanp_splits_npa_and_subscriber() -> None:
    phone = decompose("+12025550123", "USA")

    assert (phone.country_code, phone.area_code, phone.local_number) == ("1", "202", "5550123")


def test_nanp_wrong_length_degrades_without_raising() -> None:
    phone = decompose("+1202555012", "USA")

    assert phone.degraded
    assert phone.area_code == ""


@pytest.mark.parametrize(
    ("e164", "area", "local"),
    [
        ("+525512345678", "55", "12345678"),
        ("+523312345678", "331", "2345678"),
        ("+529991234567", "999", "1234567"),
        ("+521012345678", "10", "12345678"),
    ],
)
def test_mexico_longest_listed_area_code_wins(e164: str, area: str, local: str) -> None:
    phone = decompose(e164, "México")

    assert phone.area_code == area
    assert phone.local_number == local


def test_spain_has_no_area_code() -> None:
    phone = decompose("+34612345678", "España")

    assert phone.area_code == ""
    assert phone.local_number == "612345678"


def test_colombia_uses_three_digit_mobile_block() -> None:
    phone = decompose("+573001234567", "Colombia")

    assert phone.area_code == "300"
    assert phone.local_number == "1234567"


def test_colombia_landline_degrades_and_is_reported() -> None:
    diagnostics = Diagnostics()

    phone = decompose("+576012345678", "Colombia", diagnostics)

    assert phone.degraded
    assert phone.area_code == ""
    assert phone.local_number == "6012345678"
    assert diagnostics.degraded_numbers == ["+576012345678"]
    assert diagnostics.messages


@pytest.mark.parametrize(("e164", "country"), [("+56912345678", "Chile"), ("+51987654321", "Perú")])
def test_chile_and_peru_split_leading_nine(e164: str, country: str) -> None:
    phone = decompose(e164, country)

    assert phone.area_code == "9"
    assert len(phone.local_number) == 8


def test_country_without_rule_keeps_whole_national_number() -> None:
    phone = decompose("+584121234567", "Venezuela")

    assert phone.country_code == "58"
    assert phone.area_code == ""
    assert phone.local_number == "4121234567"
    assert not phone.degraded


def test_unresolvable_number_still_returns_a_result() -> None:
    phone = decompose("123", "Colombia")

    assert phone.full_e164 == "+123"
    assert phone.country_code == ""
    assert phone.local_number == "123"
    assert phone.degraded


@pytest.mark.parametrize(
    ("e164", "country"),
    [
        ("+5491122334455", "Argentina"),
        ("+5493511234567", "Argentina"),
        ("+12025550123", "USA"),
        ("+18095551234", "República Dominicana"),
        ("+525512345678", "Mexico"),
        ("+5215512345678", "Mexico"),
        ("+34612345678", "España"),
        ("+573001234567", "Colombia"),
        ("+56912345678", "Chile"),
        ("+51987654321", "Peru"),
        ("+59171234567", "Bolivia"),
        ("+584121234567", "Venezuela"),
    ],
)
def test_decomposition_reconstructs_the_original_digits(e164: str, country: str) -> None:
    assert validate(e164, country).valid

    phone = decompose(e164, country)

    assert phone.digits == digits_only(e164)


def test_unvalidated_argentine_landline_still_reconstructs() -> None:
    phone = decompose("+543511234567", "Argentina")

    assert phone.area_code == "3511"
    assert phone.mobile_indicator == ""
    assert phone.digits == "543511234567"


@pytest.mark.parametrize(
    ("e164", "prefix"),
    [
        ("+573001234567", "57300"),
        ("+34612345678", "3461"),
        ("+12025550123", "1202"),
        ("+5491122334455", "54911"),
        ("+56912345678", "56912"),
        ("+525512345678", "5255"),
        ("+59171234567", "59171"),
        ("573001234567", "57300"),
    ],
)
def test_extract_prefix_uses_the_number_plan(e164: str, prefix: str) -> None:
    assert extract_prefix(e164) == prefix


def test_extract_prefix_with_explicit_rule_and_unresolvable_input() -> None:
    assert extract_prefix("+5493511234567", lookup("Argentina")) == "5493511"
    assert extract_prefix("+123") is None


def test_normalize_records_keeps_record_context() -> None:
    record = RawRecord(phone="+573001234567", name="Ana", email="ana@example.com", region="Bogotá", country="Colombia")

    normalized = normalize_records([ValidatedRecord(record=record, e164="+573001234567")])

    assert len(normalized) == 1
    row = normalized[0].as_row()
    assert row["pais"] == "Colombia"
    assert row["area_code"] == "300"
    assert row["full_e164"] == "+573001234567"
