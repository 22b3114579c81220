"""Spreadsheet import and export for contact records and generated numbers."""
from __future__ import annotations

from .exporters import (
    export_batch_call_format,
    export_clean_records,
    export_contact_groups,
    export_country_summary,
    export_generated_numbers,
)
from .loaders import (
    BatchContactsLoad,
    MissingColumnError,
    UnsupportedFileTypeError,
    load_batch_contacts,
    load_records,
)

__all__ = [
    "BatchContactsLoad",
    "MissingColumnError",
    "UnsupportedFileTypeError",
    "export_batch_call_format",
    "export_clean_records",
    "export_contact_groups",
    "export_country_summary",
    "export_generated_numbers",
    "load_batch_contacts",
    "load_records",
]
