import logging
from typing import Any, Dict, List, Optional

from playwright.sync_api import sync_playwright

import config
from errors import AxeRunError
from utils import ensure_axe_js

logger = logging.getLogger(__name__)

RESULT_TYPES = ["violations", "passes", "incomplete", "inapplicable"]

AXE_RUN_JS = """
async (options) => {
    if (!window.axe || !axe.run) {
        return {error: 'axe not loaded'};
    }
    return await axe.run(document, options);
}
"""


def axe_options(tags: Optional[List[str]] = None) -> Dict[str, Any]:
    opts: Dict[str, Any] = {"resultTypes": list(RESULT_TYPES)}
    if tags:
        opts["runOnly"] = {"type": "tag", "values": list(tags)}
    return opts


def run_axe_on_url(url: str, timeout_ms: Optional[int] = None, tags: Optional[List[str]] = None) -> Dict[str, Any]:
    """Load *url* in headless Chromium and return the raw axe-core result.

    Browser, navigation and evaluation errors propagate; the browser is
    closed either way.
    """
    axe_path = ensure_axe_js()
    timeout_ms = timeout_ms if timeout_ms is not None else config.SCAN_TIMEOUT_MS
    tags = tags if tags is not None else config.AXE_TAGS
    with sync_playwright() as p:
        browser = p.chromium.launch(args=config.BROWSER_ARGS, headless=True)
        try:
            page = browser.new_page()
            if timeout_ms:
                page.set_default_timeout(timeout_ms)
            logger.info("Navigating to %s", url)
            page.goto(url)
            # inject axe
            page.add_script_tag(path=axe_path)
            result = page.evaluate(AXE_RUN_JS, axe_options(tags))
        finally:
            browser.close()
    if not isinstance(result, dict):
        raise AxeRunError(f"Unexpected axe result of type {type(result).__name__}")
    if result.get("error"):
        raise AxeRunError(str(result["error"]))
    logger.debug("axe returned %d violations for %s", len(result.get("violations", [])), url)
    return result
