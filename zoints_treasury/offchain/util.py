from typing import List

from solders.instruction import AccountMeta
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.sysvar import CLOCK as SYSVAR_CLOCK_PUBKEY
from solders.sysvar import RENT as SYSVAR_RENT_PUBKEY
from spl.token.constants import TOKEN_PROGRAM_ID

from ..errors import InvalidArgument


def am(pubkey: Pubkey, is_signer: bool, is_writable: bool) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=is_signer, is_writable=is_writable)


def pubkey_from_string(value, field: str = "address") -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(value)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(field, f"{value!r} is not a valid address") from e


def resolve_program_id(program_id) -> Pubkey:
    if program_id is None:
        raise InvalidArgument(
            "program_id", "pass --program_id or set TREASURY_PROGRAM_ID"
        )
    return pubkey_from_string(program_id, "program_id")


def authority_signers(
    authority: Pubkey, funder_skey: Keypair, authority_skey: Keypair
) -> List[Keypair]:
    """
    Withdrawals must be signed by the treasury authority, fail before submitting
    if the given key is not it
    """
    if authority_skey.pubkey() != authority:
        raise InvalidArgument(
            "authority_wallet",
            f"treasury authority is {authority}, not {authority_skey.pubkey()}",
        )
    if authority_skey == funder_skey:
        return [funder_skey]
    return [funder_skey, authority_skey]
