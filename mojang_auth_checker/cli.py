import sys
import argparse
import logging
from typing import List, Optional

from mojang_auth_checker.config import Settings
from mojang_auth_checker.errors import CleanError
from mojang_auth_checker.log import setup_logger
from mojang_auth_checker.model import HostsChecker

logger = logging.getLogger(__name__)


def run_clean(settings: Settings) -> int:
    """Cleans the hosts file without any UI; used by the elevated relaunch."""
    checker = HostsChecker(settings)
    try:
        removed = checker.clean()
    except CleanError as e:
        logger.error("Clean failed: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    logger.info("Headless clean removed %d line(s)", len(removed))
    return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mojang-auth-checker", description=settings.title)
    # Anything but exactly the clean directive opens the interface
    parser.add_argument(
        "command",
        nargs="*",
        help=f"'{settings.clean_directive}' cleans the hosts file and exits without showing the interface",
    )
    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    settings = settings or Settings()
    argv = sys.argv[1:] if argv is None else list(argv)
    # Parsed for --help only; unknown options open the interface too
    build_parser(settings).parse_known_args(argv)

    if argv == [settings.clean_directive]:
        setup_logger(settings, headless=True)
        return run_clean(settings)

    setup_logger(settings, headless=False)
    from mojang_auth_checker.ui import CheckerApp

    CheckerApp(settings).run()
    return 0
