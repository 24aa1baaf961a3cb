"""
Command-line interface for validating input files against field rules.

Usage:
    fieldcheck validate --rules <rules.yaml> --input <data.yaml> [options]
    fieldcheck rules
"""

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from fieldcheck.config import Settings
from fieldcheck.core.exceptions import FieldcheckError
from fieldcheck.core.predicates import PREDICATE_REGISTRY
from fieldcheck.core.rules import RuleConfigLoader, RuleEngine
from fieldcheck.observability.logger import configure_package_loggers, get_logger, log_operation
from fieldcheck.output import emit_and_halt, render_errors

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_ERRORS = 1
EXIT_CONFIG_ERROR = 2


def load_input(input_path: Path) -> dict:
    """
    Load the field values to validate.

    JSON is read through the YAML loader, so both formats are accepted.

    Raises:
        FieldcheckError: If the file cannot be read or does not hold a mapping
    """
    try:
        with open(input_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise FieldcheckError(f"Cannot read input file {input_path}: {e}")

    if not isinstance(data, dict):
        raise FieldcheckError(f"Input file must contain a mapping of field names to values: {input_path}")

    return {str(key): value for key, value in data.items()}


def validate_command(args, settings: Settings) -> int:
    """
    Execute the validate command.

    Args:
        args: Command-line arguments
        settings: Runtime settings

    Returns:
        Process exit status
    """
    rules_path = Path(args.rules) if args.rules else settings.rules_path
    input_path = Path(args.input)

    try:
        with log_operation("Validating input", logger=logger, input_path=str(input_path)):
            rule_sets = RuleConfigLoader(rules_path).load_rule_sets()
            data = load_input(input_path)

            engine = RuleEngine(separator=settings.separator)
            engine.apply(data, rule_sets, emit_and_halt=args.emit_and_halt)

            emit_and_halt(engine, include_header=not args.no_header)

    except (FieldcheckError, OSError, yaml.YAMLError) as e:
        logger.error(f"Validation could not run: {e}")
        return EXIT_CONFIG_ERROR

    errors = engine.get_errors()
    print(render_errors(errors, args.output))

    logger.info(
        "Validation finished",
        extra={"fields": len(rule_sets), "errors": len(errors)},
    )
    return EXIT_VALIDATION_ERRORS if errors else EXIT_OK


def rules_command(args, settings: Settings) -> int:
    """List the available rule names and their argument counts."""
    for name, predicate in PREDICATE_REGISTRY.items():
        upper = "n" if predicate.max_args is None else predicate.max_args
        print(f"{name}\t{predicate.min_args}-{upper} argument(s)")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fieldcheck",
        description="Validate field values against ordered rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a form submission and print all errors
  fieldcheck validate --rules config/validation_rules.yaml --input form.yaml

  # Print errors as a JSON object
  fieldcheck validate --rules config/validation_rules.yaml --input form.json --output json

  # Emit the first error as a JSON response and stop
  fieldcheck validate --rules config/validation_rules.yaml --input form.json --emit-and-halt

  # List available rules
  fieldcheck rules
        """
    )
    parser.add_argument(
        "--env-file",
        help="dotenv file with FIELDCHECK_* settings"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: FIELDCHECK_LOG_LEVEL or INFO)"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Log format (default: FIELDCHECK_LOG_FORMAT or json)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    validate_parser = subparsers.add_parser("validate", help="Validate an input file")
    validate_parser.add_argument(
        "--rules",
        help="Path to the rule configuration YAML file (default: FIELDCHECK_RULES_PATH)"
    )
    validate_parser.add_argument(
        "--input",
        required=True,
        help="Path to a YAML or JSON file mapping field names to values"
    )
    validate_parser.add_argument(
        "--output",
        default="text",
        choices=["text", "json"],
        help="Error report format (default: text)"
    )
    validate_parser.add_argument(
        "--emit-and-halt",
        action="store_true",
        help="Write the first error as a JSON payload and exit"
    )
    validate_parser.add_argument(
        "--no-header",
        action="store_true",
        help="Omit the content-type line before the JSON payload"
    )

    subparsers.add_parser("rules", help="List available rules")

    return parser


COMMANDS = {
    "validate": validate_command,
    "rules": rules_command,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_CONFIG_ERROR

    try:
        settings = Settings.from_env(args.env_file)
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return EXIT_CONFIG_ERROR

    configure_package_loggers(
        level=args.log_level or settings.log_level,
        format_type=args.log_format or settings.log_format,
    )

    return COMMANDS[args.command](args, settings)


if __name__ == "__main__":
    sys.exit(main())
