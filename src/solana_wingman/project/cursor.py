"""Cursor IDE setup for Solana Wingman projects."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

from ..models import SetupAction, SetupResult

logger = logging.getLogger(__name__)

SKILL_ROOT_ENV = "SOLANA_WINGMAN_ROOT"

CURSOR_DIR = ".cursor"
COMMANDS_DIR = ".cursor/commands"
CURSORRULES = ".cursorrules"
CONTEXT_FILE = ".cursor/solana-wingman.md"

CONTEXT_TEMPLATE = """\
# Solana Wingman Context

This project uses Solana Wingman for AI-assisted Solana development.

## Knowledge Base

Reference these when working on Solana programs:

| Resource | Path | Description |
|----------|------|-------------|
| Challenges | `knowledge/challenges/` | 10 hands-on learning challenges |
| Foundations | `knowledge/foundations/` | Core Solana concepts |
| Protocols | `knowledge/protocols/` | Jupiter, Marinade, MarginFi, Raydium |
| Standards | `knowledge/standards/` | SPL Token, Token-2022, Metaplex |
| Gotchas | `knowledge/gotchas/` | Common pitfalls |

## Data Files

| File | Content |
|------|---------|
| `data/addresses/programs.json` | Common program IDs |
| `data/addresses/tokens.json` | Popular token mints (USDC, SOL, etc.) |
| `data/addresses/protocols.json` | DeFi protocol addresses |

## Quick Commands

```bash
# Build
anchor build

# Test
anchor test

# Deploy to devnet
anchor deploy --provider.cluster devnet

# Check for gotchas
solana-gotchas programs/
```

## Security Checklist

Before deploying to mainnet:

1. [ ] Run `solana-gotchas` on all programs
2. [ ] Review `knowledge/gotchas/critical-gotchas.md`
3. [ ] Use `prompts/audit-mode.md` for full review
4. [ ] Verify all arithmetic uses checked operations
5. [ ] Confirm PDA bumps are stored
6. [ ] Check account owner validations
7. [ ] Test edge cases and error conditions

## Tips for AI Assistance

When asking for help:

- Reference specific knowledge files: `@knowledge/foundations/02-pdas.md`
- Use mode prompts: `@prompts/audit-mode.md`
- Check protocol docs: `@knowledge/protocols/jupiter.md`
"""

NEXT_STEPS = [
    "Reference @solana-wingman.md in your prompts",
    "Use /solana-build, /solana-audit, /solana-explain",
    "Check .cursor/commands/ for available commands",
]


def _copy_commands(source: Path, dest: Path) -> list[str]:
    """Copy command files from the skill root, returning the names copied."""
    copied = []
    for entry in sorted(source.iterdir()):
        target = dest / entry.name
        if entry.is_dir():
            shutil.copytree(entry, target, dirs_exist_ok=True)
        else:
            shutil.copy2(entry, target)
        copied.append(entry.name)
    return copied


def setup_cursor(
    project_dir: str | Path = ".",
    skill_root: Optional[str | Path] = None,
    dry_run: bool = False,
) -> SetupResult:
    """Prepare ``project_dir`` for Cursor with Solana Wingman context.

    Creates ``.cursor/commands``, copies ``.cursorrules`` (never overwriting an
    existing one) and command files from ``skill_root`` when present, and
    writes the ``.cursor/solana-wingman.md`` context file.

    Args:
        project_dir: Project to configure.
        skill_root: Solana Wingman checkout to copy rules and commands from.
            Falls back to the SOLANA_WINGMAN_ROOT environment variable.
        dry_run: Plan the steps without touching the filesystem.

    Returns:
        SetupResult listing every step taken or planned.
    """
    project = Path(project_dir)
    root_value = skill_root or os.environ.get(SKILL_ROOT_ENV)
    root = Path(root_value) if root_value else None
    result = SetupResult(success=True, dry_run=dry_run, target=str(project), next_steps=list(NEXT_STEPS))

    try:
        commands_dir = project / COMMANDS_DIR
        result.actions.append(SetupAction(
            description="Create .cursor/commands directory",
            path=str(commands_dir),
        ))
        if not dry_run:
            commands_dir.mkdir(parents=True, exist_ok=True)

        if root is not None and (root / CURSORRULES).is_file():
            dest = project / CURSORRULES
            if dest.exists():
                result.actions.append(SetupAction(
                    description=".cursorrules already exists, skipping",
                    path=str(dest),
                    skipped=True,
                ))
            else:
                result.actions.append(SetupAction(description="Create .cursorrules", path=str(dest)))
                if not dry_run:
                    shutil.copy2(root / CURSORRULES, dest)

        if root is not None and (root / COMMANDS_DIR).is_dir():
            if dry_run:
                names = sorted(p.name for p in (root / COMMANDS_DIR).iterdir())
            else:
                names = _copy_commands(root / COMMANDS_DIR, commands_dir)
            result.actions.append(SetupAction(
                description=f"Copy Cursor commands ({', '.join(names) or 'none'})",
                path=str(commands_dir),
            ))

        context_path = project / CONTEXT_FILE
        result.actions.append(SetupAction(
            description="Create context file at .cursor/solana-wingman.md",
            path=str(context_path),
        ))
        if not dry_run:
            context_path.write_text(CONTEXT_TEMPLATE, encoding="utf-8")
    except OSError as e:
        logger.error(f"Cursor setup failed: {e}")
        result.success = False
        result.error = f"Cursor setup failed: {e}"

    return result
