"""Unchecked arithmetic check for Solana programs.

Token amounts and lamport balances are plain integers. In release builds,
Rust wraps on overflow, so `a + b` on a u64 balance can silently
produce a tiny number. Programs should use checked_* or saturating_*
operations instead.

Detects:
- Spaced binary `+`, `-`, `*` between operands (`a + b`, `len - 1`)
- Compound assignment (`+=`, `-=`, `*=`)
- Explicit `.add(` / `.sub(` / `.mul(` calls
"""

import re
from typing import Iterator

from ..models import CheckResult, CheckStatus
from .common import MAX_LISTED_FILES, RustSource, is_comment, iter_code_lines

NAME = "unchecked_arithmetic"
TITLE = "Unchecked arithmetic operations"

_BINARY_OP_RE = re.compile(r"[\w)\]]\s+[+\-*]\s+[\w(]")
_COMPOUND_OP_RE = re.compile(r"[+\-*]=\s")
_METHOD_OP_RE = re.compile(r"\.(?:add|sub|mul)\(")

# Lines using these are treated as already handled
_SAFE_OP_RE = re.compile(
    r"\b(?:checked|saturating|wrapping|overflowing)_(?:add|sub|mul|div|rem|pow|neg)\b"
)

# Trait bounds (`T: Clone + Send`) use `+` but are not arithmetic
_TRAIT_BOUND_RE = re.compile(
    r"\bimpl\b|\bwhere\b|\bdyn\b|:\s*[A-Z]\w*(?:<[^>]*>)?\s*\+\s*[A-Z']"
)


def is_unchecked_arithmetic(line: str) -> bool:
    """Check if a single line looks like unchecked integer arithmetic."""
    if is_comment(line) or line.lstrip().startswith("#["):
        return False
    if _SAFE_OP_RE.search(line):
        return False
    if _TRAIT_BOUND_RE.search(line):
        return False
    return bool(
        _BINARY_OP_RE.search(line)
        or _COMPOUND_OP_RE.search(line)
        or _METHOD_OP_RE.search(line)
    )


def iter_expression_lines(source: RustSource) -> Iterator[str]:
    """Yield code lines that are neither comments nor inside a ``#[...]`` attribute.

    Multi-line attributes such as ``#[account(\\n  space = 8 + 32,\\n)]`` are
    skipped until their brackets balance.
    """
    attr_depth = 0
    for _, line in iter_code_lines(source.lines()):
        if attr_depth or line.lstrip().startswith("#["):
            attr_depth = max(attr_depth + line.count("[") - line.count("]"), 0)
            continue
        yield line


def check_unchecked_arithmetic(sources: list[RustSource]) -> list[CheckResult]:
    """Fire once per scan if any file contains unchecked arithmetic."""
    flagged = [
        src.path for src in sources
        if any(is_unchecked_arithmetic(line) for line in iter_expression_lines(src))
    ]

    if not flagged:
        return [CheckResult(
            name=NAME,
            title=TITLE,
            status=CheckStatus.ok,
            message="No obvious unchecked arithmetic",
        )]

    listed = flagged[:MAX_LISTED_FILES]
    return [CheckResult(
        name=NAME,
        title=TITLE,
        status=CheckStatus.warn,
        message="Potential unchecked arithmetic found",
        details=[
            "Use checked_add(), checked_sub(), or saturating operations",
            "Files:",
            *[f"  - {path}" for path in listed],
        ],
        files=flagged,
    )]
