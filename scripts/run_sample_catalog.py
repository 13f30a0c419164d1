#!/usr/bin/env python3
"""Sample catalog harness for end-to-end validation.

Builds a catalog from fixture records without running pytest: records are
enriched, deduplicated, sorted and summarized, then a report is printed.

Usage:
    # Run with the bundled fixtures and default settings
    python scripts/run_sample_catalog.py

    # Custom configuration and fixtures
    python scripts/run_sample_catalog.py --config catalog.yaml --fixtures my_records.yaml

    # Fold removed duplicates into their survivor
    python scripts/run_sample_catalog.py --merge-duplicates
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from catalog.config import ConfigurationError, load_config, load_environment_config
from catalog.logging import configure_from_settings
from catalog.pipeline import CatalogPipeline
from catalog.utils import format_timestamp
from tests.helpers.fixture_records import load_fixture_records


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(result):
    """Print a formatted summary table of pipeline results."""
    print_header("Catalog Build Summary")

    metrics = [
        ("Records In", result.total_input),
        ("Unique Records", result.total_unique),
        ("Duplicates Removed", result.total_duplicates),
        ("Enrichment Failures", result.enrichment_failures),
        ("With Salary", result.with_salary),
        ("With Tech Stack", result.with_tech_stack),
        ("Duration (seconds)", f"{result.total_duration_seconds:.3f}"),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")


def print_catalog(result):
    """Print the catalog, the duplicate report and the aggregate counters."""
    print_header("Catalog (newest first)")
    for record in result.catalog:
        salary = "-"
        if record.has_salary:
            salary = f"{record.salary_min or '?'}-{record.salary_max or '?'} {record.salary_currency} {record.salary_type}"
        print(f"{record.id:<16} {record.title[:36]:<36} {record.company or '-':<18} {salary}")
        if record.posted_at:
            print(f"{'':<16} posted: {format_timestamp(record.posted_at)}")
        if record.tech_stack:
            print(f"{'':<16} tech: {', '.join(sorted(record.tech_stack))}")

    if result.duplicates:
        print_header("Duplicate Report")
        for group in result.duplicates:
            print(f"Kept {group.kept.id}; removed {', '.join(group.removed_ids)}")

    stats = result.stats
    print_header("Statistics")
    print(f"Last updated: {format_timestamp(stats.last_updated)}")
    print(f"By platform: {stats.by_platform}")
    print(f"By contract type: {stats.by_contract_type}")
    print(f"By remote type: {stats.by_remote_type}")
    print(f"By salary range: {stats.by_salary_range.as_labels()}")
    print(f"Top tech: {stats.top_tech(5)}")
    print(f"Last {len(stats.jobs_last_n_days)} days: {stats.jobs_last_n_days}")


def main():
    """Main entry point for the sample catalog harness."""
    parser = argparse.ArgumentParser(
        description="Build a sample catalog from fixture records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: catalog.yaml, then built-in defaults)",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        default=Path(__file__).parent.parent / "tests" / "fixtures" / "sample_records.yaml",
        help="Path to fixture records YAML (default: tests/fixtures/sample_records.yaml)",
    )
    parser.add_argument(
        "--merge-duplicates",
        action="store_true",
        help="Fold removed duplicates into their survivor",
    )

    args = parser.parse_args()

    # Load environment variables (LOG_LEVEL, LOG_FORMAT, CATALOG_ENVIRONMENT)
    load_dotenv()

    print_header("Job Catalog - Sample Harness")
    print(f"Configuration file: {args.config or 'auto (defaults allowed)'}")
    print(f"Fixtures: {args.fixtures}")

    if not args.fixtures.exists():
        print(f"\n❌ Error: Fixture file not found: {args.fixtures}")
        return 1

    try:
        config = load_config(args.config, allow_defaults=True)
        env_config = load_environment_config()
    except ConfigurationError as e:
        print(f"\n❌ Configuration error:\n{e}")
        return 1

    if args.merge_duplicates:
        config = config.model_copy(
            update={"dedup": config.dedup.model_copy(update={"merge_duplicates": True})}
        )

    configure_from_settings(config.logging, env_config)

    records = load_fixture_records(args.fixtures)
    print(f"✓ Loaded {len(records)} records")

    result = CatalogPipeline(config=config).run(records)

    print_summary_table(result)
    print_catalog(result)

    return 1 if result.had_errors else 0


if __name__ == "__main__":
    sys.exit(main())
