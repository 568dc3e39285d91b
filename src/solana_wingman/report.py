"""Render gotcha scan reports for the terminal or as JSON."""

from itertools import groupby

from .models import CheckResult, CheckStatus, ScanReport

YELLOW = "\033[1;33m"
GREEN = "\033[0;32m"
NC = "\033[0m"

RULE = "━" * 42

_KEYCAP = "️⃣"


def _paint(text: str, colour: str, color: bool) -> str:
    return f"{colour}{text}{NC}" if color else text


def _banner(number: int, title: str) -> str:
    marker = f"{number}{_KEYCAP}" if 0 <= number <= 9 else f"{number}."
    return f"{marker}  Checking: {title}..."


def _result_lines(result: CheckResult, color: bool) -> list[str]:
    if result.status == CheckStatus.warn:
        lines = [_paint(f"⚠️  {result.message}", YELLOW, color)]
    elif result.status == CheckStatus.ok:
        lines = [_paint(f"✅ {result.message}", GREEN, color)]
    else:
        lines = [f"   {result.message}"]
    lines.extend(f"   {detail}" for detail in result.details)
    return lines


def render_text(report: ScanReport, color: bool = False) -> str:
    """Render the human-readable scan output, one block per check."""
    lines = [f"🔍 Scanning for Solana gotchas in {report.path}...", ""]

    if report.files_scanned == 0:
        lines.append(f"No Rust files found in {report.path}")
        return "\n".join(lines) + "\n"

    lines.extend([f"Scanning {report.files_scanned} Rust files...", ""])

    for number, group in groupby(report.checks, key=lambda c: c.number):
        results = list(group)
        lines.append(_banner(number, results[0].title))
        for result in results:
            lines.extend(_result_lines(result, color))
        lines.append("")

    lines.append(RULE)
    if report.issues == 0:
        lines.append(_paint("✅ No obvious gotchas found!", GREEN, color))
        lines.append("")
        lines.append("Note: This is a basic scan. For production:")
    else:
        lines.append(_paint(f"⚠️  Found {report.issues} potential issue(s)", YELLOW, color))
        lines.append("")
        lines.append("Review the warnings above and check:")
    lines.extend(f"  - {rec}" for rec in report.recommendations)

    return "\n".join(lines) + "\n"


def render_json(report: ScanReport) -> str:
    return report.model_dump_json(indent=2)
