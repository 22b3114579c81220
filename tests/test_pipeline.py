import random

import pandas as pd

from numplan.config import PipelineSettings
from numplan.models import RawRecord, UniquenessSets
from numplan.orchestrator import NumberingPipeline
from numplan.orchestrator.service import (
    BATCH_CALL_FILENAME,
    CLEAN_FILENAME,
    GENERATED_FILENAME,
    GROUPS_FILENAME,
    SUMMARY_FILENAME,
)

RECORDS = [
    RawRecord(phone="+573001234567", name="Ana", country="Colombia"),
    RawRecord(phone="+573109876543", name="Luis", country="Colombia"),
    RawRecord(phone="+5491122334455", name="Sofía", country="Argentina"),
    RawRecord(phone="+525512345678", name="Mateo", country="México"),
    RawRecord(phone="5730012", name="Broken", country="Colombia"),
    RawRecord(phone="+34612345678", name="Wrong country", country="Peru"),
]


def test_run_validates_counts_and_generates() -> None:
    pipeline = NumberingPipeline(rng=random.Random(11))

    result = pipeline.run(RECORDS)

    assert result.valid == 4
    assert len(result.errors) == 2
    assert result.summary == {"Colombia": 2, "Argentina": 1, "Mexico": 1}
    assert len(result.generated) == 4
    assert [item.country for item in result.generated].count("Colombia") == 2
    inputs = {record.phone for record in RECORDS}
    assert not inputs & {item.e164 for item in result.generated}


def test_run_respects_shared_uniqueness_sets() -> None:
    uniqueness = UniquenessSets()
    pipeline = NumberingPipeline(rng=random.Random(3))

    first = pipeline.run(RECORDS, uniqueness)
    second = pipeline.run(RECORDS, uniqueness)

    first_numbers = {item.e164 for item in first.generated}
    second_numbers = {item.e164 for item in second.generated}
    assert not first_numbers & second_numbers


def test_seeded_pipelines_are_reproducible() -> None:
    first = NumberingPipeline(PipelineSettings(seed=42)).run(RECORDS)
    second = NumberingPipeline(PipelineSettings(seed=42)).run(RECORDS)

    assert [item.e164 for item in first.generated] == [item.e164 for item in second.generated]


def test_run_with_no_valid_records_generates_nothing() -> None:
    result = NumberingPipeline(rng=random.Random(0)).run([RawRecord(phone="123", country="Colombia")])

    assert result.valid == 0
    assert result.summary == {}
    assert result.generated == []


def test_process_file_writes_requested_exports(tmp_path) -> None:
    input_path = tmp_path / "contacts.csv"
    input_path.write_text(
        "phone,nombre,email,region,pais\n"
        "+573001234567,Ana,ana@example.com,Bogotá,Colombia\n"
        "+12025550123,Grace,grace@example.com,DC,USA\n"
        "+5730,Short,short@example.com,Cali,Colombia\n",
        encoding="utf-8",
    )
    settings = PipelineSettings(output_dir=tmp_path / "out", export_clean=True, export_batch_call=True, seed=5)

    result = NumberingPipeline(settings).process_file(input_path)

    names = {path.name for path in result.output_files}
    assert names == {SUMMARY_FILENAME, GENERATED_FILENAME, CLEAN_FILENAME, BATCH_CALL_FILENAME}
    summary = pd.read_csv(tmp_path / "out" / SUMMARY_FILENAME, dtype=str)
    assert summary.to_dict("records") == [
        {"pais": "Colombia", "cantidad": "1"},
        {"pais": "USA", "cantidad": "1"},
    ]
    clean = pd.read_csv(tmp_path / "out" / CLEAN_FILENAME, dtype=str)
    assert list(clean["full_e164"]) == ["+573001234567", "+12025550123"]
    batch = pd.read_csv(tmp_path / "out" / BATCH_CALL_FILENAME, dtype=str)
    assert all(number.startswith("+") for number in batch["phone_number"])


def test_process_file_skips_optional_exports_by_default(tmp_path) -> None:
    input_path = tmp_path / "contacts.csv"
    input_path.write_text("phone,pais\n+573001234567,Colombia\n", encoding="utf-8")

    result = NumberingPipeline(PipelineSettings(output_dir=tmp_path)).process_file(input_path)

    assert {path.name for path in result.output_files} == {SUMMARY_FILENAME, GENERATED_FILENAME}


def test_group_contacts_writes_groups_file(tmp_path) -> None:
    pipeline = NumberingPipeline(PipelineSettings(output_dir=tmp_path), rng=random.Random(8))
    result = pipeline.run([RawRecord(phone="+573001234567", country="Colombia")])
    contacts_path = tmp_path / "contacts.csv"
    contacts_path.write_text(
        "phone_number,first_name\n+573151234567,Ana\n+5491122334455,Sofía\n",
        encoding="utf-8",
    )

    groups, path = pipeline.group_contacts(contacts_path, result.generated, result.diagnostics)

    assert path.name == GROUPS_FILENAME
    assert len(groups) == 1
    assert [contact.phone_number for contact in groups[0].contacts] == ["+573151234567"]
    assert [contact.phone_number for contact in result.diagnostics.dropped_contacts] == ["+5491122334455"]
