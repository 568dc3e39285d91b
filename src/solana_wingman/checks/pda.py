"""PDA bump storage check.

Programs that derive PDAs with find_program_address should persist the
canonical bump so later instructions can re-derive the address cheaply
and cannot be handed a non-canonical one.
"""

from ..models import CheckResult, CheckStatus
from .common import RustSource

NAME = "pda_bump_storage"
TITLE = "PDA bump storage"


def check_pda_bump_storage(sources: list[RustSource]) -> list[CheckResult]:
    """Warn once per file that derives a PDA without mentioning a bump."""
    deriving = [src for src in sources if "find_program_address" in src.content]

    if not deriving:
        return [CheckResult(
            name=NAME,
            title=TITLE,
            status=CheckStatus.ok,
            message="No manual PDA derivations found",
        )]

    results = [CheckResult(
        name=NAME,
        title=TITLE,
        status=CheckStatus.info,
        message="Found PDA derivations - verify bumps are stored",
        files=[src.path for src in deriving],
    )]
    for src in deriving:
        if "bump" not in src.content:
            results.append(CheckResult(
                name=NAME,
                title=TITLE,
                status=CheckStatus.warn,
                message=f"PDA in {src.path} may be missing bump storage",
                files=[src.path],
            ))
    return results
