"""Pydantic models for solana-wingman."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CheckStatus(str, Enum):
    """Outcome of a single gotcha check."""

    ok = "ok"
    warn = "warn"
    info = "info"


class CheckResult(BaseModel):
    """Result line produced by one gotcha check."""

    number: int = Field(default=0, description="1-based position of the check in the scan")
    name: str = Field(description="Check identifier (e.g., 'unchecked_arithmetic')")
    title: str = Field(description="Banner text shown before the check runs")
    status: CheckStatus = Field(description="Result status: ok, warn, or info")
    message: str = Field(description="Human-readable description of the outcome")
    details: list[str] = Field(default_factory=list, description="Indented follow-up lines")
    files: list[str] = Field(default_factory=list, description="Relative paths involved in the result")

    @property
    def is_finding(self) -> bool:
        return self.status == CheckStatus.warn


class ScanInput(BaseModel):
    """Input parameters for a gotcha scan."""

    path: str = Field(default=".", description="Directory to scan")
    strict: bool = Field(default=False, description="Treat any finding as a failed scan")


class ScanReport(BaseModel):
    """Full gotcha scan report."""

    scan_id: str = Field(description="Identifier derived from the scanned path and file contents")
    path: str = Field(description="Directory as given by the caller")
    files_scanned: int = Field(default=0, description="Number of Rust files scanned")
    checks: list[CheckResult] = Field(default_factory=list, description="Check results in run order")
    issues: int = Field(default=0, description="Number of warn results")
    recommendations: list[str] = Field(default_factory=list, description="Follow-up review steps")

    @property
    def findings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.is_finding]


class SetupAction(BaseModel):
    """Describes a single step taken while preparing a project."""

    description: str = Field(description="Human-readable description of the step")
    command: Optional[list[str]] = Field(default=None, description="External command, if any")
    path: Optional[str] = Field(default=None, description="File or directory touched, if any")
    skipped: bool = Field(default=False, description="Whether the step was skipped")


class SetupResult(BaseModel):
    """Result of a project setup operation."""

    success: bool = Field(description="Whether every step completed")
    dry_run: bool = Field(default=False, description="Whether steps were only planned")
    target: str = Field(description="Project directory being prepared")
    actions: list[SetupAction] = Field(default_factory=list, description="Steps taken or planned")
    next_steps: list[str] = Field(default_factory=list, description="Suggested follow-up commands")
    error: Optional[str] = Field(default=None, description="Error message if a step failed")
