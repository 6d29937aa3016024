"""
Command line validator for PayBySquare payment requests.

Usage:
    paybysquare-validate request.json
    paybysquare-validate requests/*.json --json --log-level DEBUG

Each file holds one payment request in the camelCase JSON form. Exit
status is 0 when every file is valid, 1 when any request has errors and
2 when a file cannot be read or decoded.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from paybysquare import __version__
from paybysquare.config import get_settings
from paybysquare.domain.validation import Validator
from paybysquare.schemas import ValidationReport, load_request

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the command line tool."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )


def validate_file(file_path: Path, validator: Validator) -> ValidationReport:
    """
    Load one request file and validate it.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not JSON
        pydantic.ValidationError: If a value has the wrong type
    """
    data = json.loads(file_path.read_text(encoding="utf-8"))
    request = load_request(data)
    violations = validator.validate(request)
    logger.info(f"{file_path}: {len(violations)} violation(s)")
    return ValidationReport.from_violations(request, violations)


def print_report(file_path: Path, report: ValidationReport) -> None:
    status = "OK" if report.valid else "INVALID"
    print(f"{file_path}: {status}  {report.summary}")
    for violation in report.violations:
        print(
            f"  [{violation.severity.value}] {violation.field_path}: "
            f"{violation.message} ({violation.kind.value}/{violation.rule})"
        )


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="paybysquare-validate",
        description="Validate PayBySquare payment request JSON files",
    )
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="JSON files, one payment request each",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Print reports as JSON instead of text",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    validator = Validator.from_settings(settings)
    exit_code = EXIT_OK
    reports: dict[str, dict] = {}

    for file_path in args.files:
        try:
            report = validate_file(file_path, validator)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Cannot load {file_path}: {e}")
            exit_code = EXIT_UNREADABLE
            continue

        if not report.valid and exit_code == EXIT_OK:
            exit_code = EXIT_INVALID

        if args.json:
            reports[str(file_path)] = report.model_dump(mode="json", by_alias=True)
        else:
            print_report(file_path, report)

    if args.json:
        print(json.dumps(reports, indent=2))

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
