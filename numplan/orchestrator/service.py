"""Pipeline that validates contacts, summarises them per country, and generates replacement numbers."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import PipelineSettings
from ..generator import count_by_country, generate_batch
from ..grouping import group_by_prefix
from ..ingestion import (
    export_batch_call_format,
    export_clean_records,
    export_contact_groups,
    export_country_summary,
    export_generated_numbers,
    load_batch_contacts,
    load_records,
)
from ..models import (
    ContactGroup,
    Diagnostics,
    GeneratedNumber,
    NormalizedRecord,
    RawRecord,
    RecordError,
    UniquenessSets,
)
from ..normalizer import normalize_records
from ..validator import validate_records

LOGGER = logging.getLogger(__name__)

SUMMARY_FILENAME = "resumen_por_pais.csv"
GENERATED_FILENAME = "numeros_generados.csv"
CLEAN_FILENAME = "datos_limpios.csv"
BATCH_CALL_FILENAME = "batch_call.csv"
GROUPS_FILENAME = "grupos_batch_call.csv"


@dataclass
class PipelineResult:
    summary: Dict[str, int] = field(default_factory=dict)
    normalized: List[NormalizedRecord] = field(default_factory=list)
    errors: List[RecordError] = field(default_factory=list)
    generated: List[GeneratedNumber] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    output_files: List[Path] = field(default_factory=list)

    @property
    def valid(self) -> int:
        return len(self.normalized)


class NumberingPipeline:
    """Runs validate → normalize → summarise → generate → export for one input."""

    def __init__(self, settings: Optional[PipelineSettings] = None, *, rng: Optional[random.Random] = None) -> None:
        self._settings = settings or PipelineSettings()
        self._rng = rng or random.Random(self._settings.seed)

    @property
    def settings(self) -> PipelineSettings:
        return self._settings

    def run(self, records: Iterable[RawRecord], uniqueness: Optional[UniquenessSets] = None) -> PipelineResult:
        """Process in-memory records without touching the filesystem."""

        report = validate_records(records)
        result = PipelineResult(errors=report.errors)
        result.normalized = normalize_records(report.valid, result.diagnostics)
        result.summary = count_by_country(result.normalized)

        if uniqueness is None:
            uniqueness = UniquenessSets()
        result.generated = generate_batch(
            result.summary,
            uniqueness,
            exclude=(item.e164 for item in result.normalized),
            rng=self._rng,
            attempts_per_number=self._settings.attempts_per_number,
        )
        requested = sum(result.summary.values())
        if len(result.generated) < requested:
            result.diagnostics.add(f"Generated {len(result.generated)} of {requested} requested numbers")
        return result

    def process_file(self, path: str | Path) -> PipelineResult:
        """Load ``path``, run the pipeline, and write the export files."""

        records = load_records(path, column_mapping=self._settings.column_mapping or None)
        LOGGER.info("Loaded %s records from %s", len(records), path)
        result = self.run(records)
        result.output_files.extend(self.export(result))
        return result

    def export(self, result: PipelineResult) -> List[Path]:
        output_dir = Path(self._settings.output_dir)
        written = [
            export_country_summary(result.summary, output_dir / SUMMARY_FILENAME),
            export_generated_numbers(result.generated, output_dir / GENERATED_FILENAME),
        ]
        if self._settings.export_clean:
            written.append(export_clean_records(result.normalized, output_dir / CLEAN_FILENAME))
        if self._settings.export_batch_call:
            written.append(export_batch_call_format(result.generated, output_dir / BATCH_CALL_FILENAME))
        for path in written:
            LOGGER.debug("Wrote %s", path)
        return written

    def group_contacts(
        self,
        contacts_path: str | Path,
        generated: Sequence[GeneratedNumber],
        diagnostics: Optional[Diagnostics] = None,
    ) -> tuple[List[ContactGroup], Path]:
        """Group a batch-calling contact file under ``generated`` and write the groups."""

        loaded = load_batch_contacts(contacts_path)
        for message in loaded.errors:
            LOGGER.warning("%s: %s", contacts_path, message)
        groups = group_by_prefix(loaded.contacts, generated, diagnostics)
        path = export_contact_groups(groups, Path(self._settings.output_dir) / GROUPS_FILENAME)
        return groups, path
