from typing import Any, Dict, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

import config
from shaper import SEVERITY_LEVELS

SEVERITY_COLORS = {
    "critical": "#991B1B",
    "serious": "#C2410C",
    "moderate": "#92400E",
    "minor": "#155E75",
}
MAX_LISTED = 25


def draw_wrapped(c, text, x, y, max_width, leading=14, font="Helvetica", size=11):
    words = text.split()
    line = ""
    while words and y > 20:
        w = words.pop(0)
        trial = (line + " " + w).strip()
        if stringWidth(trial, font, size) <= max_width:
            line = trial
        else:
            c.drawString(x, y, line)
            y -= leading
            line = w
    if y > 20 and line:
        c.drawString(x, y, line)
        y -= leading
    return y


def export_report(path: str, summary: Dict[str, Any], violations: List[Dict[str, Any]]) -> str:
    """Write a PDF report for a single scan run and return *path*."""
    c = canvas.Canvas(path, pagesize=A4)
    W, H = A4

    # Header
    c.setFillColor(colors.HexColor(config.PRIMARY))
    c.rect(0, H - 30, W, 30, fill=True, stroke=False)
    c.setFillColor(colors.white)
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20, H - 22, f"{config.APP_NAME} — axe-core report")

    c.setFillColor(colors.black)
    c.setFont("Helvetica", 11)
    y = H - 50
    c.drawString(20, y, f"Scanned URL: {summary.get('url') or '-'}")
    y -= 16
    c.drawString(20, y, f"Scanned at: {summary.get('timestamp') or '-'}")
    y -= 16
    c.drawString(20, y, (f"Violations: {summary.get('violations', 0)} · Passes: {summary.get('passes', 0)} · "
                         f"Incomplete: {summary.get('incomplete', 0)} · Inapplicable: {summary.get('inapplicable', 0)}"))
    y -= 20

    x = 20
    c.setFont("Helvetica-Bold", 11)
    for level in SEVERITY_LEVELS:
        c.setFillColor(colors.HexColor(SEVERITY_COLORS[level]))
        label = f"{level.capitalize()}: {summary.get(level, 0)}"
        c.drawString(x, y, label)
        x += stringWidth(label, "Helvetica-Bold", 11) + 18
    c.setFillColor(colors.black)
    y -= 24

    c.setFont("Helvetica-Bold", 12)
    c.drawString(20, y, "Violations:")
    y -= 16
    c.setFont("Helvetica", 11)
    for v in violations[:MAX_LISTED]:
        nodes = v.get("nodes", 0)
        y = draw_wrapped(c, f"• [{v.get('impact') or 'unknown'}] {v.get('id')}: {v.get('help') or ''} "
                            f"({nodes} node{'s' if nodes != 1 else ''})", 26, y, W - 46)
        if v.get("helpUrl"):
            c.setFillColor(colors.gray); c.setFont("Helvetica", 9)
            y = draw_wrapped(c, v["helpUrl"], 36, y, W - 56, leading=13, size=9)
            c.setFillColor(colors.black); c.setFont("Helvetica", 11)
        if y < 60:
            c.showPage(); y = H - 40
            c.setFont("Helvetica", 11)

    if not violations:
        c.drawString(26, y, "• No violations detected by axe.")
        y -= 16
    elif len(violations) > MAX_LISTED:
        c.drawString(26, y, f"… and {len(violations) - MAX_LISTED} more.")
        y -= 16

    # Footer note
    c.setFont("Helvetica-Oblique", 9)
    c.setFillColor(colors.gray)
    c.drawString(20, 20, "Automated axe-core check. Manual review is still needed for full WCAG conformance.")

    c.save()
    return path
