"""
CLI argument parsing for versionslock.

This module provides the main argument parsing entry point,
using modular argument builders from the cli package.
"""

import argparse
import re
import sys

import yaml

from versionslock import VERSION
from versionslock.config import EXIT_CODE
from versionslock.cli import (
    PROGRAM_DESCRIPTIONS,
    add_write_arguments,
    add_verify_arguments,
    add_why_arguments,
    add_constraints_arguments,
)

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="versionslock",
        description="Write and verify a conflict-safe dependency lock file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub_programs = parser.add_subparsers(dest="program", required=True)

    builders = {
        'write': (add_write_arguments, "Regenerate the lock file"),
        'verify': (add_verify_arguments, "Verify the lock file is up to date"),
        'why': (add_why_arguments, "Explain a lock file hash"),
        'constraints': (add_constraints_arguments, "Print the strict constraints to enforce"),
    }
    for name, (builder, help_text) in builders.items():
        sub_parser = sub_programs.add_parser(name, description=PROGRAM_DESCRIPTIONS[name], help=help_text)
        builder(sub_parser)

    return parser


def parse_arguments(argv=None):
    """Parse command-line arguments for versionslock.

    Args:
        argv: Argument list, defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed and validated arguments.
    """
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)

    if not argv:
        parser.print_help(sys.stderr)
        sys.exit(EXIT_CODE.INVALID_ARGUMENTS)

    parsed_args = parser.parse_args(argv)

    if getattr(parsed_args, 'config_file', None):
        parsed_args = apply_yaml_config_overrides(parsed_args)

    validate_args(parsed_args)
    return parsed_args


def apply_yaml_config_overrides(args):
    """
    Apply overrides from a YAML config file to the parsed arguments.

    Args:
        args (argparse.Namespace): The parsed command-line arguments

    Returns:
        argparse.Namespace: The updated arguments with YAML overrides applied
    """
    try:
        with open(args.config_file, 'r') as f:
            yaml_config = yaml.safe_load(f)
    except FileNotFoundError:
        print(f"Error: Config file {args.config_file} not found", file=sys.stderr)
        sys.exit(EXIT_CODE.INVALID_ARGUMENTS)
    except yaml.YAMLError as e:
        print(f"Error parsing YAML config file: {e}", file=sys.stderr)
        sys.exit(EXIT_CODE.INVALID_ARGUMENTS)

    if not yaml_config:
        print(f"Warning: Config file {args.config_file} is empty or invalid", file=sys.stderr)
        return args
    if not isinstance(yaml_config, dict):
        print(f"Error: Config file {args.config_file} must contain a mapping", file=sys.stderr)
        sys.exit(EXIT_CODE.INVALID_ARGUMENTS)

    args_dict = vars(args)
    for key, value in yaml_config.items():
        key = str(key).replace('-', '_')
        if key not in args_dict:
            print(f"Warning: Config file contains unknown parameter '{key}', skipping", file=sys.stderr)
            continue
        # Skip None values so they don't override CLI args
        if value is None:
            continue
        args_dict[key] = value

    return argparse.Namespace(**args_dict)


def validate_args(args):
    error_messages = []
    if args.program == "why" and not HEX_PATTERN.match(args.hash or ""):
        error_messages.append(f"Invalid hash '{args.hash}': expected hexadecimal characters from the lock file")
    if getattr(args, 'lockfile', None) is not None and not str(args.lockfile).strip():
        error_messages.append("Lock file path must not be empty")

    if error_messages:
        for msg in error_messages:
            print(msg, file=sys.stderr)

        sys.exit(EXIT_CODE.INVALID_ARGUMENTS)
