import json

import pandas as pd

from numplan.ingestion.exporters import (
    CLEAN_COLUMNS,
    export_batch_call_format,
    export_clean_records,
    export_contact_groups,
    export_country_summary,
    export_generated_numbers,
)
from numplan.models import Contact, ContactGroup, GeneratedNumber, RawRecord, ValidatedRecord
from numplan.normalizer import normalize_records

GENERATED = [
    GeneratedNumber(country="Colombia", e164="+573001234567"),
    GeneratedNumber(country="Mexico", e164="+525512345678"),
    GeneratedNumber(country="Colombia", e164="+573109876543"),
]


def test_export_country_summary_skips_empty_countries(tmp_path) -> None:
    path = export_country_summary({"Colombia": 2, "Peru": 0}, tmp_path / "out" / "resumen_por_pais.csv")

    frame = pd.read_csv(path, dtype=str)
    assert list(frame.columns) == ["pais", "cantidad"]
    assert frame.to_dict("records") == [{"pais": "Colombia", "cantidad": "2"}]


def test_export_generated_numbers_one_row_per_country_without_plus(tmp_path) -> None:
    path = export_generated_numbers(GENERATED, tmp_path / "numeros_generados.csv")

    frame = pd.read_csv(path, dtype=str)
    assert list(frame["pais"]) == ["Colombia", "Mexico"]
    assert frame.loc[0, "numeros_generados"] == "573001234567, 573109876543"
    assert frame.loc[1, "numeros_generados"] == "525512345678"


def test_export_clean_records_to_csv_and_excel(tmp_path) -> None:
    record = RawRecord(phone="+573001234567", name="Ana", email="ana@example.com", region="Bogotá", country="Colombia")
    normalized = normalize_records([ValidatedRecord(record=record, e164="+573001234567")])

    csv_frame = pd.read_csv(export_clean_records(normalized, tmp_path / "datos_limpios.csv"), dtype=str)
    excel_frame = pd.read_excel(export_clean_records(normalized, tmp_path / "datos_limpios.xlsx"), dtype=str)

    for frame in (csv_frame, excel_frame):
        assert list(frame.columns) == CLEAN_COLUMNS
        assert frame.loc[0, "area_code"] == "300"
        assert frame.loc[0, "local_number"] == "1234567"
        assert frame.loc[0, "full_e164"] == "+573001234567"


def test_export_batch_call_format_keeps_plus(tmp_path) -> None:
    frame = pd.read_csv(export_batch_call_format(GENERATED, tmp_path / "batch.csv"), dtype=str)
    assert list(frame.columns) == ["phone_number", "pais"]
    assert frame.loc[0, "phone_number"] == "+573001234567"

    bare = pd.read_csv(export_batch_call_format(GENERATED, tmp_path / "bare.csv", include_country=False), dtype=str)
    assert list(bare.columns) == ["phone_number"]


def test_export_contact_groups_flattens_contacts(tmp_path) -> None:
    groups = [
        ContactGroup(
            originating_number="+573009876543",
            nickname="Colombia",
            contacts=[Contact(phone_number="+573001234567", variables={"name": "Ana"}), Contact(phone_number="+573001112233")],
        )
    ]

    frame = pd.read_csv(export_contact_groups(groups, tmp_path / "groups.csv"), dtype=str, keep_default_na=False)

    assert len(frame) == 2
    assert set(frame["originating_number"]) == {"+573009876543"}
    assert json.loads(frame.loc[0, "variables"]) == {"name": "Ana"}
    assert frame.loc[1, "variables"] == ""
