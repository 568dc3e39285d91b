"""Solana Wingman: gotcha scanning and project setup for Solana/Anchor programs."""

from .models import CheckResult, CheckStatus, ScanInput, ScanReport
from .scanner import scan_directory

__version__ = "0.1.0"

__all__ = ["CheckResult", "CheckStatus", "ScanInput", "ScanReport", "scan_directory"]
