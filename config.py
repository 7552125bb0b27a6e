# config.py — env-driven settings for the scanner, report and dashboard
import os

# -----------------------------
# Output
# -----------------------------
OUTPUT_DIR = os.getenv("OUTPUT_DIR", ".")
SUMMARY_FILE = "accessibility-summary.json"
VIOLATIONS_PREFIX = "accessibility-violations-"
FULL_PREFIX = "accessibility-full-"

# -----------------------------
# axe-core
# -----------------------------
ASSETS_DIR = os.getenv("ASSETS_DIR", "assets")
AXE_VERSION = os.getenv("AXE_VERSION", "4.9.1")
AXE_CDN = os.getenv("AXE_CDN", f"https://cdnjs.cloudflare.com/ajax/libs/axe-core/{AXE_VERSION}/axe.min.js")
AXE_DOWNLOAD_TIMEOUT = int(os.getenv("AXE_DOWNLOAD_TIMEOUT", "20"))
# empty -> every rule axe ships with
AXE_TAGS = [t.strip() for t in os.getenv("AXE_TAGS", "").split(",") if t.strip()]

# -----------------------------
# Browser
# -----------------------------
DEFAULT_URL = "https://example.com"
_timeout = os.getenv("SCAN_TIMEOUT_MS", "").strip()
SCAN_TIMEOUT_MS = int(_timeout) if _timeout else None  # None -> Playwright defaults
BROWSER_ARGS = [a for a in os.getenv("BROWSER_ARGS", "--no-sandbox").split() if a]

# -----------------------------
# Logging / branding
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
APP_NAME = os.getenv("BRAND_NAME", "Accessibility Scanner")
PRIMARY = os.getenv("BRAND_PRIMARY", "#0F4C81")
