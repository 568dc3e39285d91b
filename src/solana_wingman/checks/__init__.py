"""Gotcha checks for Solana/Anchor programs, in the order they run."""

from typing import Callable

from ..models import CheckResult
from . import accounts, arithmetic, pda
from .accounts import (
    check_account_closure,
    check_init_if_needed,
    check_owner_validation,
    check_signer_verification,
    check_space_calculation,
)
from .arithmetic import check_unchecked_arithmetic
from .common import RustSource, load_sources, walk_rust_files
from .pda import check_pda_bump_storage

CheckFunc = Callable[[list[RustSource]], list[CheckResult]]

# (name, banner title, function)
CHECKS: tuple[tuple[str, str, CheckFunc], ...] = (
    (arithmetic.NAME, arithmetic.TITLE, check_unchecked_arithmetic),
    (accounts.SIGNER_NAME, accounts.SIGNER_TITLE, check_signer_verification),
    (pda.NAME, pda.TITLE, check_pda_bump_storage),
    (accounts.INIT_IF_NEEDED_NAME, accounts.INIT_IF_NEEDED_TITLE, check_init_if_needed),
    (accounts.OWNER_NAME, accounts.OWNER_TITLE, check_owner_validation),
    (accounts.CLOSE_NAME, accounts.CLOSE_TITLE, check_account_closure),
    (accounts.SPACE_NAME, accounts.SPACE_TITLE, check_space_calculation),
)

__all__ = [
    "CHECKS",
    "CheckFunc",
    "RustSource",
    "load_sources",
    "walk_rust_files",
    "check_unchecked_arithmetic",
    "check_signer_verification",
    "check_pda_bump_storage",
    "check_init_if_needed",
    "check_owner_validation",
    "check_account_closure",
    "check_space_calculation",
]
