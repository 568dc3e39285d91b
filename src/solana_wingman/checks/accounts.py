"""Anchor account constraint checks.

Covers signer verification, init_if_needed usage, owner validation,
account closure and rent/space calculations. Each check only looks at
text; none of them parse Rust.
"""

import re
from typing import Iterator

from ..models import CheckResult, CheckStatus
from .common import MAX_LISTED_FILES, RustSource, is_comment

# --- Signer verification ---

SIGNER_NAME = "signer_verification"
SIGNER_TITLE = "Signer verification"

_PRIVILEGED_FIELD_RE = re.compile(
    r"\bpub\s+(\w*(?:authority|signer|admin)\w*)\s*:\s*(.+)"
)
_FIELD_START_RE = re.compile(r"\bpub\s+\w+\s*:|[{;]\s*$")

# Only account types can sign; plain `Pubkey` data fields are skipped
_ACCOUNT_TYPE_RE = re.compile(
    r"\b(?:AccountInfo|UncheckedAccount|SystemAccount|Account|AccountLoader|InterfaceAccount)\b"
)

# --- init_if_needed ---

INIT_IF_NEEDED_NAME = "init_if_needed"
INIT_IF_NEEDED_TITLE = "Account initialization patterns"

# --- Owner validation ---

OWNER_NAME = "owner_validation"
OWNER_TITLE = "Account owner validation"

# --- Closure ---

CLOSE_NAME = "account_closure"
CLOSE_TITLE = "Account closure patterns"
_CLOSE_RE = re.compile(r"close\s*=")

# --- Rent / space ---

SPACE_NAME = "space_calculation"
SPACE_TITLE = "Rent/space calculations"
_INIT_CONSTRAINTS = frozenset({"init", "init_if_needed"})

_ACCOUNT_ATTR_START = "#[account("
_STRING_LITERAL_RE = re.compile(r'b?"(?:[^"\\]|\\.)*"')
_CONSTRAINT_NAME_RE = re.compile(r"\s*(\w+)")


def iter_account_attributes(content: str) -> Iterator[str]:
    """Yield the body of every ``#[account(...)]`` attribute in ``content``.

    Bodies may span several lines; parentheses are balanced to find the end.
    """
    start = content.find(_ACCOUNT_ATTR_START)
    while start != -1:
        body_start = start + len(_ACCOUNT_ATTR_START)
        depth = 1
        i = body_start
        while i < len(content) and depth:
            ch = content[i]
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            i += 1
        yield content[body_start:i - 1] if depth == 0 else content[body_start:]
        start = content.find(_ACCOUNT_ATTR_START, i)


def constraint_names(body: str) -> list[str]:
    """Return the top-level constraint names of an ``#[account(...)]`` body.

    ``init, payer = user, seeds = [b"signer"], bump`` gives
    ``["init", "payer", "seeds", "bump"]``. String literals are dropped first
    so seed bytes never read as constraints.
    """
    body = _STRING_LITERAL_RE.sub('""', body)
    tokens = []
    depth = 0
    current = ""
    for ch in body:
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        if ch == "," and depth == 0:
            tokens.append(current)
            current = ""
        else:
            current += ch
    tokens.append(current)

    names = []
    for token in tokens:
        match = _CONSTRAINT_NAME_RE.match(token)
        if match:
            names.append(match.group(1))
    return names


def _field_attributes(lines: list[str], field_idx: int) -> str:
    """Collect the attribute lines directly above a field, without comments."""
    collected = []
    for j in range(field_idx - 1, -1, -1):
        line = lines[j]
        if is_comment(line):
            continue
        if _FIELD_START_RE.search(line):
            break
        collected.append(line)
    return "\n".join(reversed(collected))


def _has_signer_constraint(lines: list[str], field_idx: int) -> bool:
    attributes = _field_attributes(lines, field_idx)
    return any(
        "signer" in constraint_names(body)
        for body in iter_account_attributes(attributes)
    )


def find_unsigned_authorities(source: RustSource) -> list[str]:
    """Return privileged field names in ``source`` not typed or constrained as signers."""
    lines = source.lines()
    unsigned = []
    for i, line in enumerate(lines):
        match = _PRIVILEGED_FIELD_RE.search(line)
        if not match:
            continue
        field_name, field_type = match.group(1), match.group(2)
        if "Signer<" in field_type:
            continue
        if not _ACCOUNT_TYPE_RE.search(field_type):
            continue
        if _has_signer_constraint(lines, i):
            continue
        unsigned.append(field_name)
    return unsigned


def check_signer_verification(sources: list[RustSource]) -> list[CheckResult]:
    """Warn when authority-like account fields are not required to sign."""
    flagged: list[str] = []
    fields: list[str] = []
    for src in sources:
        names = find_unsigned_authorities(src)
        if names:
            flagged.append(src.path)
            fields.extend(f"{src.path}: {name}" for name in names)

    if not flagged:
        return [CheckResult(
            name=SIGNER_NAME,
            title=SIGNER_TITLE,
            status=CheckStatus.ok,
            message="Signer patterns look correct",
        )]

    return [CheckResult(
        name=SIGNER_NAME,
        title=SIGNER_TITLE,
        status=CheckStatus.warn,
        message="Found 'authority' fields that may need Signer<> constraint",
        details=[f"  - {entry}" for entry in fields[:MAX_LISTED_FILES]],
        files=flagged,
    )]


def check_init_if_needed(sources: list[RustSource]) -> list[CheckResult]:
    """Warn when init_if_needed is used anywhere."""
    flagged = [src.path for src in sources if "init_if_needed" in src.content]

    if not flagged:
        return [CheckResult(
            name=INIT_IF_NEEDED_NAME,
            title=INIT_IF_NEEDED_TITLE,
            status=CheckStatus.ok,
            message="Using explicit init (safer)",
        )]

    return [CheckResult(
        name=INIT_IF_NEEDED_NAME,
        title=INIT_IF_NEEDED_TITLE,
        status=CheckStatus.warn,
        message="Using init_if_needed - ensure this is intentional",
        details=["init_if_needed can mask reinitialization bugs"],
        files=flagged,
    )]


def check_owner_validation(sources: list[RustSource]) -> list[CheckResult]:
    """Point at Account<> types so owner constraints get reviewed."""
    flagged = [
        src.path for src in sources
        if _ACCOUNT_ATTR_START in src.content and "Account<" in src.content
    ]

    if not flagged:
        return [CheckResult(
            name=OWNER_NAME,
            title=OWNER_TITLE,
            status=CheckStatus.ok,
            message="No constrained Account<> types to review",
        )]

    return [CheckResult(
        name=OWNER_NAME,
        title=OWNER_TITLE,
        status=CheckStatus.info,
        message="Found Account<> types - verify owner constraints exist",
        files=flagged,
    )]


def check_account_closure(sources: list[RustSource]) -> list[CheckResult]:
    """Report whether any close constraints exist."""
    flagged = [src.path for src in sources if _CLOSE_RE.search(src.content)]

    if flagged:
        return [CheckResult(
            name=CLOSE_NAME,
            title=CLOSE_TITLE,
            status=CheckStatus.ok,
            message="Found close constraints",
            files=flagged,
        )]

    return [CheckResult(
        name=CLOSE_NAME,
        title=CLOSE_TITLE,
        status=CheckStatus.info,
        message="No close constraints found (may be intentional)",
    )]


def check_space_calculation(sources: list[RustSource]) -> list[CheckResult]:
    """Warn when an account is initialized without an explicit space."""
    initializing: list[str] = []
    flagged: list[str] = []
    for src in sources:
        attrs = [
            names for names in map(constraint_names, iter_account_attributes(src.content))
            if _INIT_CONSTRAINTS.intersection(names)
        ]
        if not attrs:
            continue
        initializing.append(src.path)
        if any("space" not in names for names in attrs):
            flagged.append(src.path)

    if not initializing:
        return [CheckResult(
            name=SPACE_NAME,
            title=SPACE_TITLE,
            status=CheckStatus.ok,
            message="No account initializations found",
        )]

    if not flagged:
        return [CheckResult(
            name=SPACE_NAME,
            title=SPACE_TITLE,
            status=CheckStatus.ok,
            message="Found space calculations",
            files=initializing,
        )]

    return [CheckResult(
        name=SPACE_NAME,
        title=SPACE_TITLE,
        status=CheckStatus.warn,
        message="No explicit space calculations - verify account sizes",
        details=[f"  - {path}" for path in flagged[:MAX_LISTED_FILES]],
        files=flagged,
    )]
