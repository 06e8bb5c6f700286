from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cinesync.app import run_service
from cinesync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mirror the Notion movie schedule into Discord scheduled events"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single sync pass and exit instead of looping",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    load_dotenv()

    try:
        result = run_service(once=parsed_args.once)
    except KeyboardInterrupt:
        log.info("Closed by user (Ctrl+C)")
        sys.exit(0)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    if result is not None and result.aborted:
        sys.exit(1)


if __name__ == "__main__":
    main()
