"""
Command-line checker for libconfig files.

Usage:
    python -m pylibconfig /path/to/app.cfg
    python -m pylibconfig /path/to/app.cfg database.host server.port
    python -m pylibconfig --json /path/to/app.cfg
"""

import argparse
import json
import sys

from .const import APP_NAME, APP_VERSION
from .errors import LibconfigError
from .loader import ConfigLoader
from .logging import get_logger, setup_logging_from_args


logger = get_logger("main")


def main(argv: list[str] | None = None) -> int:
    """Check a configuration file and return the process exit code."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Parse a libconfig file and print selected settings",
    )

    parser.add_argument(
        "config",
        help="Path to configuration file",
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Dot-separated setting paths to print (e.g. database.host)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the requested settings (or the whole file) as JSON",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each loaded file (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Also log include resolution (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Log errors only",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write logs to a rotating log file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored log output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    args = parser.parse_args(argv)

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        colors=not args.no_color,
    )

    try:
        config = ConfigLoader().load_file(args.config)
        selected = {path: config.lookup(path).to_python() for path in args.paths}
    except LibconfigError as e:
        logger.error(f"{e.kind.value}: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(selected if args.paths else config.to_dict(), indent=2))
    elif args.paths:
        for path, value in selected.items():
            print(f"{path} = {json.dumps(value)}")
    else:
        print(f"{args.config}: OK ({len(config.root)} top-level settings)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
