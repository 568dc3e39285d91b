"""Bootstrap a new Anchor project with Solana Wingman defaults."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ..models import SetupAction, SetupResult

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "my_solana_project"

# anchor init runs a package install and can be slow
ANCHOR_INIT_TIMEOUT = 600
COMMAND_TIMEOUT = 30

PREREQUISITES = (
    ("solana", "Solana CLI", 'sh -c "$(curl -sSfL https://release.solana.com/stable/install)"'),
    ("anchor", "Anchor", "cargo install --git https://github.com/coral-xyz/anchor anchor-cli"),
    ("rustc", "Rust", "curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh"),
)

CARGO_DEPENDENCIES = """
# Common Solana dependencies
[dependencies.anchor-spl]
version = "0.30.0"
features = ["token", "associated_token"]
"""

DEV_SCRIPT = """\
#!/bin/bash
# Start local validator and watch for changes

# Start validator in background
solana-test-validator --reset &
VALIDATOR_PID=$!

# Wait for validator to start
sleep 3

# Build and deploy
anchor build
anchor deploy

echo "✅ Local validator running (PID: $VALIDATOR_PID)"
echo "   Press Ctrl+C to stop"

# Cleanup on exit
trap "kill $VALIDATOR_PID 2>/dev/null" EXIT

# Keep running
wait
"""

GITIGNORE_ADDITIONS = """
# Solana
test-ledger/
.anchor/
target/

# IDE
.idea/
.vscode/
*.swp

# Logs
*.log
"""

PROJECT_DIRS = ("tests/fixtures", "scripts", "docs")


def check_prerequisites() -> Optional[str]:
    """Return an error message for the first missing tool, or None."""
    for command, label, install in PREREQUISITES:
        if shutil.which(command) is None:
            return f"{label} not installed. Run: {install}"
    return None


def _run_command(cmd: list[str], cwd: Path, timeout: int = COMMAND_TIMEOUT) -> tuple[Optional[str], Optional[str]]:
    """Run a command and return stdout and error.

    Returns:
        Tuple of (output, error). If successful, error is None.
        If failed, output is None and error contains the error message.
    """
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        if result.returncode != 0:
            return None, result.stderr.strip() or f"Command failed with code {result.returncode}"
        return result.stdout, None
    except FileNotFoundError:
        return None, f"{cmd[0]} not found"
    except subprocess.TimeoutExpired:
        return None, f"{' '.join(cmd)} timed out"


def init_project(
    name: str = DEFAULT_PROJECT_NAME,
    parent_dir: str | Path = ".",
    dry_run: bool = False,
) -> SetupResult:
    """Create an Anchor project named ``name`` inside ``parent_dir``.

    Runs ``anchor init``, points the Solana CLI at localhost, adds the
    anchor-spl dependency, creates helper directories, writes
    ``scripts/dev.sh`` and extends ``.gitignore``. Stops at the first
    failing step.
    """
    parent = Path(parent_dir)
    project = parent / name
    result = SetupResult(success=True, dry_run=dry_run, target=str(project))

    missing = check_prerequisites()
    if missing:
        result.success = False
        result.error = missing
        return result

    commands = (
        ("Create Anchor project", ["anchor", "init", name], parent, ANCHOR_INIT_TIMEOUT),
        ("Configure Solana CLI for localhost", ["solana", "config", "set", "--url", "localhost"], project, COMMAND_TIMEOUT),
    )
    for description, cmd, cwd, timeout in commands:
        result.actions.append(SetupAction(description=description, command=cmd))
        if dry_run:
            continue
        logger.info(f"Running: {' '.join(cmd)}")
        _, error = _run_command(cmd, cwd, timeout)
        if error:
            result.success = False
            result.error = f"{description} failed: {error}"
            return result

    cargo_toml = project / "programs" / name / "Cargo.toml"
    gitignore = project / ".gitignore"
    dev_script = project / "scripts" / "dev.sh"

    result.actions.append(SetupAction(description="Add anchor-spl dependency", path=str(cargo_toml)))
    result.actions.extend(
        SetupAction(description=f"Create {d}/ directory", path=str(project / d))
        for d in PROJECT_DIRS
    )
    result.actions.append(SetupAction(description="Create local development script", path=str(dev_script)))
    result.actions.append(SetupAction(description="Extend .gitignore", path=str(gitignore)))

    if not dry_run:
        try:
            with open(cargo_toml, "a", encoding="utf-8") as f:
                f.write(CARGO_DEPENDENCIES)
            for d in PROJECT_DIRS:
                (project / d).mkdir(parents=True, exist_ok=True)
            dev_script.write_text(DEV_SCRIPT, encoding="utf-8")
            dev_script.chmod(0o755)
            with open(gitignore, "a", encoding="utf-8") as f:
                f.write(GITIGNORE_ADDITIONS)
        except OSError as e:
            logger.error(f"Project setup failed: {e}")
            result.success = False
            result.error = f"Project setup failed: {e}"
            return result

    result.next_steps = [
        f"cd {name}",
        "solana-test-validator  # In one terminal",
        "anchor build           # Build the program",
        "anchor test            # Run tests",
        "./scripts/dev.sh       # Or use the dev script",
    ]
    return result
