"""
Channel Catalog Pipeline
Command line entry point: convert, validate and add
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from catalog_pipeline.core.codecs import CatalogFormat, get_codec
from catalog_pipeline.core.codecs.base import YEAR_TEXT_RE
from catalog_pipeline.core.config import AppConfig, ConfigLoader, ConfigValidationError
from catalog_pipeline.core.conversion import CatalogConverter
from catalog_pipeline.core.errors import (
    CatalogError,
    InputNotFound,
    ParseError,
    SchemaViolation,
    UnsupportedConversion,
)
from catalog_pipeline.core.records import FIELD_ORDER, ChannelRecord
from catalog_pipeline.core.validation import ERROR, Finding, ValidationEngine, ValidationReport
from shared.storage import CatalogStore

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

CONVERT_USAGE = (
    "Usage: channel-catalog convert <input_file> <output_file>\n"
    "Supported conversions: json<->m3u, json<->csv, m3u<->csv"
)


def setup_logging(config: AppConfig) -> logging.Logger:
    """Configure logging with file and console handlers."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if config.log_dir:
        logs_dir = Path(config.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / "catalog_pipeline.log"
        handlers.insert(0, logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True
    )

    return logging.getLogger(__name__)


def load_configuration(config_path: Optional[str]) -> AppConfig:
    """
    Load and validate application configuration.

    An explicit --config path must exist; the bundled default is optional.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return AppConfig()
        return ConfigLoader(DEFAULT_CONFIG_PATH).load()
    return ConfigLoader(Path(config_path)).load()


def build_manual_record(fields: Sequence[str], config: AppConfig) -> ChannelRecord:
    """
    Turn the 11 positional `add` fields into a record.

    Name, URL and category are required; country and language fall back to
    the configured defaults; any status other than 'false' means true.

    Raises:
        SchemaViolation: If a required field is empty or the year is not numeric.
    """
    values = dict(zip(FIELD_ORDER, (f.strip() for f in fields)))

    findings = [
        Finding(ERROR, None, key, "Name, URL, and Category are required")
        for key in ("name", "url", "category")
        if not values[key]
    ]
    if values["year"] and not YEAR_TEXT_RE.match(values["year"]):
        findings.append(Finding(ERROR, None, "year", f"Year must be numeric, got {values['year']!r}"))
    ValidationReport(findings=findings).raise_for_errors()

    return ChannelRecord.from_dict({
        "name": values["name"],
        "url": values["url"],
        "logo": values["logo"] or None,
        "category": values["category"],
        "group": values["group"],
        "country": values["country"] or config.default_country,
        "language": values["language"] or config.default_language,
        "resolution": values["resolution"],
        "year": int(values["year"]) if values["year"] else None,
        "status": values["status"] != "false",
        "tags": values["tags"],
    })


def run_convert(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    converter = CatalogConverter(config.playlist_name_source)
    count = converter.convert_file(Path(args.input), Path(args.output))
    print(f"Conversion completed: {count} channel(s) written to {args.output}")
    return 0


def run_validate(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    path = Path(args.file)
    fmt = CatalogFormat.from_path(path)
    if not path.is_file():
        raise InputNotFound(path)

    engine = ValidationEngine(config.playlist_name_source)
    report = engine.validate_bytes(path.read_bytes(), fmt)
    for line in report.format_lines():
        print(line)

    if args.fix:
        if fmt is not CatalogFormat.STRUCTURED:
            logger.warning("--fix only rewrites JSON catalogs; file left unchanged")
        else:
            try:
                with CatalogStore(path, config.lock_timeout) as store:
                    store.load()
                    store.save()
                print(f"✓ Auto-formatted and sorted by group then name: {path}")
            except ParseError as e:
                logger.warning(f"File not rewritten: {e}")

    return 0 if report.passed else 1


def run_add(args: argparse.Namespace, config: AppConfig, logger: logging.Logger) -> int:
    catalog_path = Path(config.catalog_path)

    if args.file:
        import_path = Path(args.file)
        fmt = CatalogFormat.from_path(import_path)
        if not import_path.is_file():
            raise InputNotFound(import_path)

        # Decode everything before touching the catalog
        records = get_codec(fmt, config.playlist_name_source).decode(import_path.read_bytes())

        with CatalogStore(catalog_path, config.lock_timeout) as store:
            store.load()
            import_log = store.bulk_insert(records)
            store.save()

        log_path = import_log.write(import_path.with_name(import_path.name + ".import.log"))
        for line in import_log.format_lines():
            print(line)
        print("")
        print("Import complete!")
        print(f"  Added: {import_log.added} channel(s)")
        print(f"  Skipped: {import_log.skipped} channel(s)")
        print(f"  Log saved to: {log_path}")
        return 0

    if len(args.fields) != len(FIELD_ORDER):
        print(args.usage, file=sys.stderr, end="")
        print(f"Expected {len(FIELD_ORDER)} fields: {' '.join(FIELD_ORDER)}", file=sys.stderr)
        return 1

    record = build_manual_record(args.fields, config)
    with CatalogStore(catalog_path, config.lock_timeout) as store:
        store.load()
        store.insert(record)
        store.save()

    print("Channel added successfully.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="channel-catalog",
        description="Channel Catalog Pipeline - convert, validate and maintain channel catalogs"
    )
    parser.add_argument("--config", type=str, default=None, help="YAML configuration file.")
    parser.add_argument("--catalog", type=str, default=None, help="Catalog JSON file (overrides config).")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert between json, csv and m3u files.")
    convert.add_argument("input", help="Input file (.json, .csv, .m3u)")
    convert.add_argument("output", help="Output file (.json, .csv, .m3u)")
    convert.set_defaults(handler=run_convert)

    validate = commands.add_parser("validate", help="Validate a channel file and report every finding.")
    validate.add_argument("file", help="File to validate")
    validate.add_argument("--fix", action="store_true",
                          help="Rewrite a valid JSON catalog sorted by group then name.")
    validate.set_defaults(handler=run_validate)

    add = commands.add_parser("add", help="Add channels to the catalog.")
    add.add_argument("-f", dest="file", type=str, default=None, help="Add channels from a json, csv or m3u file.")
    add.add_argument("fields", nargs="*", metavar="FIELD", help=" ".join(FIELD_ORDER))
    add.set_defaults(handler=run_add, usage=add.format_usage())

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main execution entry for the Channel Catalog Pipeline."""
    args = build_parser().parse_args(argv)

    try:
        config = load_configuration(args.config)
    except FileNotFoundError as e:
        print(f"Configuration file not found: {e}", file=sys.stderr)
        return 1
    except ConfigValidationError as e:
        print(f"Configuration validation failed: {e}", file=sys.stderr)
        return 1

    if args.catalog:
        config = config.with_catalog_path(args.catalog)

    logger = setup_logging(config)
    logger.info("=" * 60)
    logger.info(f"Channel Catalog Pipeline - {args.command.upper()}")
    logger.info("=" * 60)

    try:
        return args.handler(args, config, logger)
    except UnsupportedConversion as e:
        logger.error(f"Unsupported conversion: {e}")
        if args.command == "convert":
            print(CONVERT_USAGE, file=sys.stderr)
        return 1
    except SchemaViolation as e:
        logger.error(f"Invalid channel: {e}")
        return 1
    except CatalogError as e:
        logger.error(f"Error: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
