"""Utilities for loading contact records from spreadsheets."""
from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import Contact, RawRecord

PathLike = Union[str, Path]

_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "phone": ("phone", "phone_number", "telefono", "teléfono", "tel", "numero", "número"),
    "name": ("name", "nombre", "full_name"),
    "email": ("email", "e-mail", "correo"),
    "region": ("region", "región", "state", "estado"),
    "country": ("pais", "país", "country"),
}

# Column positions used when the file carries no header row.
_POSITIONAL_LAYOUT: Mapping[str, int] = {"phone": 0, "name": 1, "email": 2, "region": 5, "country": 6}

_HEADER_HINT = re.compile(r"phone|nombre|name|email|pais|country|region", re.IGNORECASE)
_BATCH_PHONE_COLUMN = re.compile(r"^(phone[_\s]?number|telefono|tel|phone)$", re.IGNORECASE)
_BATCH_PHONE_FORMAT = re.compile(r"^\+\d{8,15}$")


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


class MissingColumnError(ValueError):
    """Raised when a required column cannot be found in the input file."""


@dataclass
class BatchContactsLoad:
    """Contacts accepted from a batch-calling file plus per-row problems."""

    contacts: List[Contact] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def preview(self) -> List[Contact]:
        return self.contacts[:5]


def load_records(
    path: PathLike,
    *,
    column_mapping: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[RawRecord]:
    """Load contact rows from a CSV/TSV/XLSX file.

    Parameters
    ----------
    path:
        Path to the spreadsheet.
    column_mapping:
        Optional mapping of :class:`RawRecord` field names (``phone``,
        ``name``, ``email``, ``region``, ``country``) to header names. Only
        used when the file has a header row.
    sheet_name:
        Sheet selector for Excel files. Ignored for CSV files.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.

    Header fields that match no known name fall back to the headerless
    column positions. A header without any usable phone column raises
    :class:`MissingColumnError`.
    """

    frame = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs, header=None)
    if frame.empty:
        return []

    first_row = [_clean_text(value) or "" for value in frame.iloc[0].tolist()]
    if _looks_like_header(first_row):
        positions = _resolve_positions(first_row, dict(column_mapping or {}))
        if positions.get("phone") is None:
            raise MissingColumnError(f"No phone column found in header of {path}")
        header: Optional[List[str]] = first_row
        body = frame.iloc[1:]
    else:
        positions = dict(_POSITIONAL_LAYOUT)
        header = None
        body = frame

    records: List[RawRecord] = []
    for _, row in body.iterrows():
        values = [_clean_text(value) for value in row.tolist()]
        phone = _value_at(values, positions.get("phone"))
        if not phone:
            continue
        used = {index for index in positions.values() if index is not None}
        extra: Dict[str, Any] = {}
        for index, value in enumerate(values):
            if index in used or value is None:
                continue
            key = header[index] if header is not None and index < len(header) and header[index] else f"column_{index}"
            extra[key] = value
        records.append(
            RawRecord(
                phone=phone,
                name=_value_at(values, positions.get("name")) or "",
                email=_value_at(values, positions.get("email")) or "",
                region=_value_at(values, positions.get("region")) or "",
                country=_value_at(values, positions.get("country")) or "",
                extra=extra,
            )
        )
    return records


def load_batch_contacts(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> BatchContactsLoad:
    """Load a batch-calling contact list.

    The phone column (``phone_number``, ``phone``, ``telefono`` or ``tel``)
    is required; every other non-empty column becomes a template variable.
    """

    frame = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    columns = [str(column).strip() for column in frame.columns]
    phone_column = next((column for column in columns if _BATCH_PHONE_COLUMN.match(column)), None)
    if phone_column is None:
        raise MissingColumnError(
            "No phone number column found; expected one of 'phone_number', 'phone', 'telefono' or 'tel'"
        )

    frame.columns = columns
    result = BatchContactsLoad()
    for position, (_, row) in enumerate(frame.iterrows()):
        row_index = position + 2
        raw_phone = _clean_text(row[phone_column])
        if not raw_phone:
            result.errors.append(f"Row {row_index}: empty phone number")
            continue
        phone_number = raw_phone if raw_phone.startswith("+") else f"+{raw_phone}"
        if not _BATCH_PHONE_FORMAT.match(phone_number):
            result.errors.append(f"Row {row_index}: invalid phone number: {raw_phone}")
            continue
        variables: Dict[str, str] = {}
        for column in columns:
            if column == phone_column or not column:
                continue
            text = _clean_text(row[column])
            if text is not None:
                variables[column] = text
        result.contacts.append(Contact(phone_number=phone_number, variables=variables, row_index=row_index))
    return result


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
    header: Optional[int] = 0,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    loader_kwargs.setdefault("dtype", str)
    loader_kwargs.setdefault("header", header)
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        if loader_kwargs["header"] is None and "names" not in loader_kwargs:
            # Headerless rows may be ragged; size the frame to the widest one.
            width = _max_field_count(path_obj, loader_kwargs.get("sep", ","), loader_kwargs.get("encoding", "utf-8"))
            if width == 0:
                return pd.DataFrame()
            loader_kwargs["names"] = range(width)
        try:
            return pd.read_csv(path_obj, **loader_kwargs)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()

    if suffix in {".xls", ".xlsx", ".xlsm", ".xlsb"}:
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=loader_kwargs.pop("engine", None) or "openpyxl", **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _max_field_count(path: Path, sep: str, encoding: str) -> int:
    with path.open(newline="", encoding=encoding) as handle:
        return max((len(row) for row in csv.reader(handle, delimiter=sep)), default=0)


def _looks_like_header(first_row: Sequence[str]) -> bool:
    return bool(_HEADER_HINT.search("".join(first_row[:2])))


def _resolve_positions(header: Sequence[str], mapping: Mapping[str, Union[str, Sequence[str]]]) -> Dict[str, Optional[int]]:
    positions: Dict[str, Optional[int]] = {}
    lowered = [column.lower() for column in header]
    for field_name, synonyms in _FIELD_SYNONYMS.items():
        if field_name in mapping:
            wanted = mapping[field_name]
            names = [wanted] if isinstance(wanted, str) else list(wanted)
            positions[field_name] = next((header.index(name) for name in names if name in header), None)
            continue
        positions[field_name] = None
        for index, column in enumerate(lowered):
            if any(column == synonym or column.startswith(f"{synonym}_") or column.startswith(f"{synonym} ") for synonym in synonyms):
                positions[field_name] = index
                break

    # Unmatched fields fall back to the headerless layout when that column is free.
    taken = {index for index in positions.values() if index is not None}
    for field_name, index in _POSITIONAL_LAYOUT.items():
        if positions.get(field_name) is None and index not in taken and index < len(header):
            positions[field_name] = index
            taken.add(index)
    return positions


def _value_at(values: Sequence[Optional[str]], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(values):
        return None
    return values[index]


def _clean_text(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "BatchContactsLoad",
    "MissingColumnError",
    "UnsupportedFileTypeError",
    "load_batch_contacts",
    "load_records",
]
