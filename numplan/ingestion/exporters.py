"""Export utilities for country summaries, generated numbers, and cleaned contact data."""
from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import ContactGroup, GeneratedNumber, NormalizedRecord

PathLike = Union[str, Path]

SUMMARY_COLUMNS = ["pais", "cantidad"]
GENERATED_COLUMNS = ["pais", "numeros_generados"]
CLEAN_COLUMNS = [
    "phone",
    "name",
    "email",
    "region",
    "pais",
    "country_code",
    "area_code",
    "local_number",
    "full_e164",
]
GROUP_COLUMNS = ["originating_number", "nickname", "phone_number", "variables"]


def export_country_summary(summary: Mapping[str, int], path: PathLike, **kwargs) -> Path:
    """Write one ``pais,cantidad`` row per country with at least one record."""

    rows = [{"pais": country, "cantidad": count} for country, count in summary.items() if count > 0]
    return _export(pd.DataFrame(rows, columns=SUMMARY_COLUMNS), path, **kwargs)


def export_generated_numbers(generated: Sequence[GeneratedNumber], path: PathLike, **kwargs) -> Path:
    """Write one row per country with its numbers, without ``+``, joined by ``", "``."""

    by_country: Dict[str, List[str]] = defaultdict(list)
    for item in generated:
        number = item.e164.lstrip("+")
        if number:
            by_country[item.country].append(number)
    rows = [{"pais": country, "numeros_generados": ", ".join(numbers)} for country, numbers in by_country.items()]
    return _export(pd.DataFrame(rows, columns=GENERATED_COLUMNS), path, **kwargs)


def export_clean_records(records: Sequence[NormalizedRecord], path: PathLike, **kwargs) -> Path:
    rows = [record.as_row() for record in records]
    return _export(pd.DataFrame(rows, columns=CLEAN_COLUMNS), path, **kwargs)


def export_batch_call_format(
    generated: Sequence[GeneratedNumber],
    path: PathLike,
    *,
    include_country: bool = True,
    **kwargs,
) -> Path:
    """Write generated numbers as a batch-calling contact list (``phone_number`` column first)."""

    columns = ["phone_number", "pais"] if include_country else ["phone_number"]
    rows = []
    for item in generated:
        if not item.e164:
            continue
        row = {"phone_number": item.e164 if item.e164.startswith("+") else f"+{item.e164}"}
        if include_country:
            row["pais"] = item.country
        rows.append(row)
    return _export(pd.DataFrame(rows, columns=columns), path, **kwargs)


def export_contact_groups(groups: Sequence[ContactGroup], path: PathLike, **kwargs) -> Path:
    rows = [
        {
            "originating_number": group.originating_number,
            "nickname": group.nickname or "",
            "phone_number": contact.phone_number,
            "variables": json.dumps(contact.variables, ensure_ascii=False) if contact.variables else "",
        }
        for group in groups
        for contact in group.contacts
    ]
    return _export(pd.DataFrame(rows, columns=GROUP_COLUMNS), path, **kwargs)


def _export(
    dataframe: pd.DataFrame,
    path: PathLike,
    *,
    sheet_name: str = "Results",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = [
    "export_batch_call_format",
    "export_clean_records",
    "export_contact_groups",
    "export_country_summary",
    "export_generated_numbers",
]
