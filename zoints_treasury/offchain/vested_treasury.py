import datetime

import fire
from solders.keypair import Keypair

from ..onchain.vesting import to_unix_seconds
from ..utils import get_signing_info, network
from ..utils import program_id as default_program_id
from .client import TreasuryClient
from .instructions import create_vested_treasury_and_fund_account, withdraw_vested
from .util import authority_signers, pubkey_from_string, resolve_program_id


def create(
    amount: int,
    period: int,
    percentage: int,
    wallet: str = "creator",
    authority: str = None,
    program_id: str = default_program_id,
):
    """
    Create a vested treasury together with its fund account.
    ``percentage`` is in basis points unlocked every ``period`` seconds.
    """
    program = resolve_program_id(program_id)
    funder_skey, funder = get_signing_info(wallet)
    authority = pubkey_from_string(authority, "authority") if authority else funder
    client = TreasuryClient(network.get_context(), program)
    settings = client.get_settings()

    treasury_skey = Keypair()
    instructions = create_vested_treasury_and_fund_account(
        program,
        funder,
        treasury_skey.pubkey(),
        authority,
        settings.token,
        amount,
        period,
        percentage,
    )
    signature = client.send(instructions, [funder_skey, treasury_skey])

    print(f"Created vested treasury {treasury_skey.pubkey()}")
    network.show_tx(signature)
    return signature, str(treasury_skey.pubkey())


def withdraw(
    treasury: str,
    wallet: str = "creator",
    authority_wallet: str = None,
    program_id: str = default_program_id,
):
    """
    Withdraw everything unlocked so far to the authority
    """
    program = resolve_program_id(program_id)
    funder_skey, funder = get_signing_info(wallet)
    treasury = pubkey_from_string(treasury, "treasury")
    client = TreasuryClient(network.get_context(), program)
    vested_treasury = client.get_vested_treasury(treasury)
    if authority_wallet is None or authority_wallet == wallet:
        authority_skey = funder_skey
    else:
        authority_skey, _ = get_signing_info(authority_wallet)
    signers = authority_signers(vested_treasury.authority, funder_skey, authority_skey)

    instruction = withdraw_vested(
        program, funder, treasury, vested_treasury.authority, vested_treasury.mint
    )
    signature = client.send([instruction], signers)

    network.show_tx(signature)
    return signature


def show(
    treasury: str,
    now: int = None,
    program_id: str = default_program_id,
):
    """
    Print the vesting progress of a vested treasury
    """
    program = resolve_program_id(program_id)
    treasury = pubkey_from_string(treasury, "treasury")
    if now is None:
        now = to_unix_seconds(datetime.datetime.now(datetime.timezone.utc))
    client = TreasuryClient(network.get_context(), program)
    status = client.vested_status(treasury, now)

    print(f"Unlocked:  {status.unlocked}")
    print(f"Withdrawn: {status.withdrawn}")
    print(f"Available: {status.available}")
    if status.next_unlock is not None:
        next_unlock = datetime.datetime.fromtimestamp(
            status.next_unlock, datetime.timezone.utc
        )
        print(f"Next unlock at {next_unlock}")
    return status


if __name__ == "__main__":
    fire.Fire({"create": create, "withdraw": withdraw, "show": show})
