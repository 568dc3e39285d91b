"""Shared utilities for Solana gotcha checks."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Iterator

logger = logging.getLogger(__name__)


DEFAULT_SKIP_DIRS: frozenset[str] = frozenset({
    "target",
    "node_modules",
    ".git",
    ".anchor",
    "test-ledger",
    "__pycache__",
    ".pytest_cache",
    ".venv",
    "venv",
})

RUST_EXTENSIONS: frozenset[str] = frozenset({".rs"})

# Number of files listed under a warning
MAX_LISTED_FILES = 3


@dataclass(frozen=True)
class RustSource:
    """A Rust file loaded for scanning."""

    path: str
    content: str

    def lines(self) -> list[str]:
        return self.content.split("\n")


def walk_rust_files(
    path: str | Path,
    exclude_dirs: set[str] | None = None,
) -> Generator[Path, None, None]:
    """Walk a project tree yielding Rust source files in sorted order.

    Args:
        path: Root directory to walk.
        exclude_dirs: Additional directory names to skip.

    Yields:
        Path objects for matching source files.
    """
    path = Path(path)
    if not path.exists() or not path.is_dir():
        return

    skip = DEFAULT_SKIP_DIRS | exclude_dirs if exclude_dirs else DEFAULT_SKIP_DIRS

    found: list[Path] = []
    for root, dirs, files in os.walk(path):
        dirs[:] = [d for d in dirs if d not in skip]
        for fname in files:
            if Path(fname).suffix.lower() in RUST_EXTENSIONS:
                found.append(Path(root) / fname)

    yield from sorted(found, key=lambda p: p.relative_to(path).as_posix())


def load_sources(path: str | Path, exclude_dirs: set[str] | None = None) -> list[RustSource]:
    """Read every Rust file under ``path``. Unreadable files are skipped."""
    base = Path(path)
    sources: list[RustSource] = []
    for file_path in walk_rust_files(base, exclude_dirs):
        try:
            content = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.debug(f"Skipping unreadable file {file_path}: {e}")
            continue
        sources.append(RustSource(path=file_path.relative_to(base).as_posix(), content=content))
    return sources


def is_comment(line: str) -> bool:
    """Check if a Rust line starts a line, doc or block comment."""
    stripped = line.lstrip()
    return stripped.startswith("//") or stripped.startswith("/*")


def iter_code_lines(lines: list[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(index, line)`` for lines outside comments.

    Lines inside a ``/* ... */`` block are skipped up to the closing ``*/``.
    """
    in_block = False
    for i, line in enumerate(lines):
        if in_block:
            if "*/" in line:
                in_block = False
            continue
        stripped = line.lstrip()
        if stripped.startswith("/*"):
            in_block = "*/" not in stripped[2:]
            continue
        if stripped.startswith("//"):
            continue
        yield i, line
