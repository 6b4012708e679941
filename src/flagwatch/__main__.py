#!/usr/bin/env python3
"""
flagwatch: CI-first visibility into feature flags
"""
import argparse
import logging
import os
import sys

from . import __version__
from .config_loader import load_config
from .errors import ConfigurationError, FileScanError, FlagwatchError, InternalError
from .log import setup_logging
from .output import format_report
from .runner import EXIT_INTERNAL_FAILURE, exit_code_for, run

logger = logging.getLogger("flagwatch.cli")

EPILOG = """\
examples:
  flagwatch
  flagwatch --ci
  flagwatch --json > flags.json
  flagwatch --config flagwatch.config.json
  flagwatch --ignore "**/test/**" --ignore "**/fixtures/**"

exit codes:
  0  success (or issues found without --strict)
  1  policy violation in strict mode
  2  configuration or internal failure
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="flagwatch",
        description="flagwatch: find unused, undefined and dead feature flags",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="?", default=".", help="Path to scan (default: current directory)")
    parser.add_argument("--ci", action="store_true", help="CI-friendly output (no emojis or colour)")
    parser.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    parser.add_argument("--config", metavar="PATH", help="path to configuration file (.json, .yml, .yaml, .py)")
    parser.add_argument("--ignore", metavar="PATTERN", action="append", default=[],
                        help="extra exclude glob (repeatable)")
    parser.add_argument("--strict", action="store_true", help="exit 1 when any issue is found")
    parser.add_argument("--verbose", action="store_true", help="itemized report and debug logging")
    parser.add_argument("--workers", type=int, default=1, help="detect flags with N worker threads")
    parser.add_argument("--version", action="version", version=f"flagwatch {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    root = os.path.abspath(args.path)

    try:
        config = load_config(args.config, cli_excludes=args.ignore, strict=args.strict)
        result = run(root, config, max_workers=max(1, args.workers))
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        if e.config_path:
            logger.error("Config path: %s", e.config_path)
        return EXIT_INTERNAL_FAILURE
    except FileScanError as e:
        logger.error("Scan error: %s", e)
        return EXIT_INTERNAL_FAILURE
    except InternalError as e:
        logger.error("Internal error: %s", e)
        if e.__cause__ is not None:
            logger.debug("Cause: %r", e.__cause__)
        return EXIT_INTERNAL_FAILURE
    except FlagwatchError as e:
        logger.error("Unexpected error: %s", e)
        return EXIT_INTERNAL_FAILURE
    except Exception as e:
        logger.error("Unexpected error: %s", e)
        logger.debug("Unexpected error details", exc_info=True)
        return EXIT_INTERNAL_FAILURE

    print(format_report(result, json_mode=args.json, ci=args.ci, verbose=args.verbose))
    return exit_code_for(result, config.strict)


if __name__ == "__main__":
    sys.exit(main())
