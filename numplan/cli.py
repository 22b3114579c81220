"""Command line interface for validating contacts and generating replacement numbers."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, PipelineSettings, load_configuration
from .ingestion import MissingColumnError, UnsupportedFileTypeError
from .orchestrator import NumberingPipeline


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Validate contact phone numbers per country and generate fresh, collision-free numbers",
    )
    parser.add_argument("input", help="Path to the contact spreadsheet (CSV, TSV or XLSX)")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the exported files (default: output)",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Also export the validated, decomposed records (datos_limpios.csv)",
    )
    parser.add_argument(
        "--batch-call",
        action="store_true",
        default=None,
        help="Also export the generated numbers in batch-calling format",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional configuration file (YAML or JSON); command line flags take precedence",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible generation")
    parser.add_argument(
        "--group-contacts",
        default=None,
        help="Batch-calling contact file to group under the generated numbers",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="List every rejected number",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> PipelineSettings:
    config = load_configuration(args.config) if args.config else {}
    settings = PipelineSettings.from_mapping(config)
    if args.output_dir is not None:
        settings.output_dir = Path(args.output_dir)
    if args.clean is not None:
        settings.export_clean = args.clean
    if args.batch_call is not None:
        settings.export_batch_call = args.batch_call
    if args.seed is not None:
        settings.seed = args.seed
    return settings


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = _settings_from_args(args)
        pipeline = NumberingPipeline(settings)
        result = pipeline.process_file(args.input)
        if args.group_contacts:
            groups, groups_path = pipeline.group_contacts(args.group_contacts, result.generated, result.diagnostics)
            result.output_files.append(groups_path)
            logging.info("Grouped contacts under %s originating numbers", len(groups))
    except (ConfigurationError, UnsupportedFileTypeError, MissingColumnError, FileNotFoundError) as exc:
        logging.error("%s", exc)
        return 1

    for country, count in result.summary.items():
        logging.info("%s: %s", country, count)
    logging.info("Valid records: %s", result.valid)
    if result.errors:
        logging.info("Rejected records: %s", len(result.errors))
        if args.verbose:
            for error in result.errors:
                logging.info("  - %s", error.describe())
    for message in result.diagnostics.messages:
        logging.debug("%s", message)
    for path in result.output_files:
        logging.info("Wrote %s", Path(path).resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
