"""
Deterministic addresses of the accounts owned by the treasury program.

The seed phrases below are part of the program's address scheme and must match it
byte for byte, otherwise derived addresses silently point to the wrong accounts.
"""
import logging
from typing import Optional, Sequence, Tuple

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from ..errors import DerivationExhausted, InvalidArgument

_LOGGER = logging.getLogger(__name__)

SETTINGS_SEED = b"settings"
SIMPLE_TREASURY_SEED = b"simple"
SIMPLE_FUND_SEED = b"simple fund"
SIMPLE_AUTHORITY_SEED = b"simple authority"
VESTED_AUTHORITY_SEED = b"vested authority"
USER_COMMUNITY_SEED = b"user"
ZOINTS_COMMUNITY_SEED = b"zoints"

MAX_SEEDS = 16
MAX_SEED_LEN = 32
ZOINTS_NAME_CHARACTERS = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-.()"
)


def _check_seeds(seeds: Sequence[bytes]):
    # the bump occupies one of the seed slots
    if len(seeds) >= MAX_SEEDS:
        raise InvalidArgument("seeds", f"at most {MAX_SEEDS - 1} seeds are allowed")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise InvalidArgument(
                "seeds", f"seed {bytes(seed)!r} is longer than {MAX_SEED_LEN} bytes"
            )


def check_zoints_name(name: bytes) -> bytes:
    """
    Names of zoints communities double as derivation seeds and are restricted
    to 1-32 characters from ``A-Z a-z 0-9 _ - . ( )``
    """
    if isinstance(name, str):
        name = name.encode()
    if len(name) < 1:
        raise InvalidArgument("name", "zoints community name is too short")
    if len(name) > MAX_SEED_LEN:
        raise InvalidArgument("name", "zoints community name is too long")
    if not all(c in ZOINTS_NAME_CHARACTERS for c in name):
        raise InvalidArgument(
            "name", "zoints community name contains invalid characters"
        )
    return name


def _create_program_address(
    program_id: Pubkey, seeds: Sequence[bytes], bump: int
) -> Optional[Pubkey]:
    """
    The program address for one bump, or None if that candidate lies on the curve
    """
    try:
        return Pubkey.create_program_address(list(seeds) + [bytes([bump])], program_id)
    except Exception as e:
        # solders does not export PubkeyError from any python module
        if type(e).__name__ != "PubkeyError":
            raise
        return None


def find_program_address(
    program_id: Pubkey, seeds: Sequence[bytes]
) -> Tuple[Pubkey, int]:
    """
    Returns the first valid program address searching bumps from 255 down to 0,
    together with that bump.
    """
    seeds = [bytes(s) for s in seeds]
    _check_seeds(seeds)
    for bump in range(255, -1, -1):
        address = _create_program_address(program_id, seeds, bump)
        if address is not None:
            _LOGGER.debug("Derived %s with bump %d", address, bump)
            return address, bump
    raise DerivationExhausted(program_id, seeds)


def settings_address(program_id: Pubkey) -> Tuple[Pubkey, int]:
    return find_program_address(program_id, [SETTINGS_SEED])


def simple_treasury_fund_authority(
    program_id: Pubkey, treasury: Pubkey
) -> Tuple[Pubkey, int]:
    return find_program_address(program_id, [SIMPLE_AUTHORITY_SEED, bytes(treasury)])


def vested_treasury_fund_authority(
    program_id: Pubkey, treasury: Pubkey
) -> Tuple[Pubkey, int]:
    return find_program_address(program_id, [VESTED_AUTHORITY_SEED, bytes(treasury)])


def associated_fund_address(fund_authority: Pubkey, mint: Pubkey) -> Pubkey:
    """
    Token account of ``fund_authority`` for ``mint`` under the associated token
    account scheme. Fund authorities are program addresses, which the scheme accepts
    as owners.
    """
    return get_associated_token_address(fund_authority, mint)


def simple_treasury_pda(program_id: Pubkey, authority: Pubkey) -> Tuple[Pubkey, int]:
    """
    Treasury address of the older protocol generation, where a simple treasury
    is identified by its authority alone
    """
    return find_program_address(program_id, [SIMPLE_TREASURY_SEED, bytes(authority)])


def simple_treasury_fund_pda(
    program_id: Pubkey, authority: Pubkey
) -> Tuple[Pubkey, int]:
    return find_program_address(program_id, [SIMPLE_FUND_SEED, bytes(authority)])


def user_community_address(program_id: Pubkey, user: Pubkey) -> Tuple[Pubkey, int]:
    return find_program_address(program_id, [USER_COMMUNITY_SEED, bytes(user)])


def zoints_community_address(program_id: Pubkey, name) -> Tuple[Pubkey, int]:
    name = check_zoints_name(name)
    return find_program_address(program_id, [ZOINTS_COMMUNITY_SEED, name])
