#!/usr/bin/env python3
"""
versionslock - Main Entry Point

This module provides the main entry point for the versionslock command line,
with error handling that maps every failure category to an exit code and a
remediation hint.
"""

import signal
import sys
import traceback

import yaml

from versionslock.cli_parser import parse_arguments
from versionslock.config import EXIT_CODE
from versionslock.cycle import LockCycle
from versionslock.enforcement import constraints_from_lock_file
from versionslock.error_messages import ErrorFormatter, format_error
from versionslock.errors import (
    VersionsLockException,
    ConfigurationError,
    UnresolvedDependenciesError,
    UnsupportedSelectorError,
    LockFileFormatError,
    StaleLockStateError,
    FileSystemError,
)
from versionslock.lock_logging import setup_logging, apply_logging_options
from versionslock.lockfile import format_why_report
from versionslock.progress import create_stage_progress
from versionslock.resolution import load_snapshot

logger = setup_logging("versionslock")
error_formatter = ErrorFormatter(use_colors=True)


def signal_handler(sig, frame):
    """Handle SIGINT (Ctrl+C) and SIGTERM."""
    signal_name = signal.Signals(sig).name
    logger.warning(f"Received signal {signal_name} ({sig})")
    sys.exit(EXIT_CODE.INTERRUPTED)


def build_cycle(args) -> LockCycle:
    """Create the lock cycle for one command invocation."""
    return LockCycle(
        lambda: load_snapshot(args.snapshot, logger=logger),
        args.lockfile,
        logger=logger,
        check_preconditions=not getattr(args, 'skip_preconditions', False),
    )


def handle_write_command(args) -> int:
    stages = ["Loading resolution snapshot", "Computing lock state", "Writing lock file"]
    cycle = build_cycle(args)
    with create_stage_progress(stages, logger=logger) as advance_stage:
        cycle.snapshot.get()
        advance_stage()
        cycle.full_lock_state.get()
        advance_stage()
        cycle.write()
    return EXIT_CODE.SUCCESS


def handle_verify_command(args) -> int:
    stages = ["Loading resolution snapshot", "Computing lock state", "Comparing with lock file"]
    cycle = build_cycle(args)
    with create_stage_progress(stages, logger=logger) as advance_stage:
        cycle.snapshot.get()
        advance_stage()
        full_lock_state = cycle.full_lock_state.get()
        advance_stage()
        verified = cycle.verify()

    if verified:
        logger.status(f"Lock state in {args.lockfile} is up to date ({len(full_lock_state)} modules)")
    return EXIT_CODE.SUCCESS


def handle_why_command(args) -> int:
    cycle = build_cycle(args)
    result = cycle.why(args.hash)
    report = format_why_report(result, path=args.lockfile)
    if result.found:
        logger.result(report)
    else:
        logger.info(report)
    return EXIT_CODE.SUCCESS


def handle_constraints_command(args) -> int:
    constraints = constraints_from_lock_file(args.lockfile, logger=logger)
    if args.output_format == "yaml":
        print(yaml.safe_dump([c.to_dict() for c in constraints], sort_keys=False), end="")
    else:
        for constraint in constraints:
            print(f"{constraint.notation} (strictly, because: {constraint.because})")
    return EXIT_CODE.SUCCESS


COMMAND_HANDLERS = {
    'write': handle_write_command,
    'verify': handle_verify_command,
    'why': handle_why_command,
    'constraints': handle_constraints_command,
}


def _main_impl(argv=None):
    """
    Main implementation, separated out so that main() can wrap it with
    exception handling.
    """
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    args = parse_arguments(argv)
    apply_logging_options(logger, args)

    handler = COMMAND_HANDLERS.get(args.program)
    if handler is None:
        raise ConfigurationError(
            f"Unsupported command: {args.program}",
            parameter="program",
            expected=list(COMMAND_HANDLERS),
            actual=args.program,
        )
    return handler(args)


def _log_exception(e: VersionsLockException):
    logger.error(error_formatter.format_exception(e))


def main(argv=None):
    """
    Main entry point with error handling.

    Every versionslock failure is fatal for the current run and is reported
    with all affected items and the suggested fix.
    """
    try:
        return _main_impl(argv)

    except StaleLockStateError as e:
        _log_exception(e)
        return EXIT_CODE.STALE_LOCK_STATE

    except (UnresolvedDependenciesError, UnsupportedSelectorError) as e:
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except LockFileFormatError as e:
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except ConfigurationError as e:
        _log_exception(e)
        return EXIT_CODE.CONFIG_ERROR

    except FileSystemError as e:
        _log_exception(e)
        return EXIT_CODE.FILE_NOT_FOUND

    except VersionsLockException as e:
        _log_exception(e)
        return EXIT_CODE.FAILURE

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_CODE.INTERRUPTED

    except Exception as e:
        logger.error(format_error('INTERNAL_ERROR', error=str(e)))
        if any(getattr(h, 'level', 0) <= 10 for h in logger.handlers):
            traceback.print_exc()
        else:
            logger.info("Run with --debug for full stack trace")
        return EXIT_CODE.ERROR


if __name__ == "__main__":
    sys.exit(main())
