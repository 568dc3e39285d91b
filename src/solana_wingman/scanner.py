"""Run the gotcha checks over a directory of Rust sources."""

import hashlib
import logging
import uuid
from pathlib import Path
from typing import Sequence

from .checks import CHECKS, CheckFunc, RustSource, load_sources
from .models import CheckResult, CheckStatus, ScanReport

logger = logging.getLogger(__name__)

CRITICAL_GOTCHAS_DOC = "knowledge/gotchas/critical-gotchas.md"
AUDIT_MODE_PROMPT = "prompts/audit-mode.md"

SCAN_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "solana-wingman/gotchas")


def run_check_safely(
    number: int,
    name: str,
    title: str,
    check_func: CheckFunc,
    sources: list[RustSource],
) -> list[CheckResult]:
    """Run a check function, turning any exception into a warn result.

    Returns:
        List of CheckResult objects numbered with ``number``.
    """
    try:
        results = check_func(sources)
    except Exception as e:
        logger.exception(f"Check {name} failed")
        results = [CheckResult(
            name=name,
            title=title,
            status=CheckStatus.warn,
            message=f"Error running {name}: {str(e)}",
        )]
    return [r.model_copy(update={"number": number}) for r in results]


def derive_scan_id(scan_path: Path, sources: list[RustSource]) -> str:
    """Derive a stable scan id so an unchanged directory always gets the same one."""
    digest = hashlib.sha256(str(scan_path.resolve()).encode("utf-8"))
    for src in sources:
        digest.update(b"\0" + src.path.encode("utf-8") + b"\0")
        digest.update(src.content.encode("utf-8"))
    return str(uuid.uuid5(SCAN_ID_NAMESPACE, digest.hexdigest()))


def generate_recommendations(issues: int) -> list[str]:
    """Follow-up review steps for the summary section."""
    if issues == 0:
        return [
            "Run a full security audit",
            f"Review {CRITICAL_GOTCHAS_DOC}",
            "Consider a professional audit for mainnet",
        ]
    return [
        CRITICAL_GOTCHAS_DOC,
        f"{AUDIT_MODE_PROMPT} for full audit",
    ]


def scan_directory(
    path: str | Path,
    checks: Sequence[tuple[str, str, CheckFunc]] = CHECKS,
) -> ScanReport:
    """Scan every Rust file under ``path`` with each gotcha check.

    Raises:
        ValueError: If ``path`` does not exist or is not a directory.
    """
    scan_path = Path(path).expanduser()
    if not scan_path.exists():
        raise ValueError(f"Path does not exist: {path}")
    if not scan_path.is_dir():
        raise ValueError(f"Path is not a directory: {path}")

    sources = load_sources(scan_path)
    report = ScanReport(
        scan_id=derive_scan_id(scan_path, sources),
        path=str(path),
        files_scanned=len(sources),
    )

    if not sources:
        logger.info(f"No Rust files found in {path}")
        return report

    logger.info(f"Scanning {len(sources)} Rust files in {path}")
    for number, (name, title, check_func) in enumerate(checks, start=1):
        results = run_check_safely(number, name, title, check_func, sources)
        logger.debug(f"{name}: {', '.join(r.status.value for r in results)}")
        report.checks.extend(results)

    report.issues = sum(1 for c in report.checks if c.is_finding)
    report.recommendations = generate_recommendations(report.issues)
    return report
