# axe_scanner.py — scan one URL with axe-core and append the results for the dashboard
# Run: python3 axe_scanner.py https://example.org/
import logging
import sys
from typing import List, Optional

import config
from scanner_web import run_axe_on_url
from shaper import format_for_grafana
from storage import persist

logger = logging.getLogger(__name__)


def scan_website(url: str) -> dict:
    return run_axe_on_url(url)


def print_summary(summary) -> None:
    print("\n✅ Scan complete!")
    print(f"Total violations: {summary.violations}")
    print(f"  Critical: {summary.critical}")
    print(f"  Serious: {summary.serious}")
    print(f"  Moderate: {summary.moderate}")
    print(f"  Minor: {summary.minor}")


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    url = args[0] if args else config.DEFAULT_URL
    print(f"Scanning {url}...")
    try:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        logging.getLogger().setLevel(config.LOG_LEVEL)
        results = scan_website(url)
        formatted = format_for_grafana(results)
        files = persist(formatted, config.OUTPUT_DIR)
    except Exception as e:
        logger.debug("Scan of %s failed", url, exc_info=True)
        print(f"Error scanning website: {e}", file=sys.stderr)
        return 1
    logger.info("Wrote %s, %s, %s", files.summary, files.violations, files.full)
    print_summary(formatted.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
