import fire
from solders.keypair import Keypair

from ..errors import InvalidArgument
from ..onchain.accounts import SimpleTreasuryMode, parse_mode
from ..utils import get_signing_info, network
from ..utils import program_id as default_program_id
from .client import TreasuryClient
from .instructions import create_simple_treasury_and_fund_account, withdraw_simple
from .util import authority_signers, pubkey_from_string, resolve_program_id


def mode_from_string(mode) -> SimpleTreasuryMode:
    """
    "locked", "unlocked" or the ordinal, which fire passes as an int
    """
    if not isinstance(mode, str):
        return parse_mode(mode)
    try:
        return SimpleTreasuryMode[mode.capitalize()]
    except KeyError:
        raise InvalidArgument(
            "mode", f"expected locked or unlocked, got {mode!r}"
        ) from None


def create(
    wallet: str = "creator",
    authority: str = None,
    mode: str = "locked",
    program_id: str = default_program_id,
):
    """
    Create a simple treasury together with its fund account.
    The authority defaults to the wallet itself.
    """
    mode = mode_from_string(mode)
    program = resolve_program_id(program_id)
    funder_skey, funder = get_signing_info(wallet)
    authority = pubkey_from_string(authority, "authority") if authority else funder
    client = TreasuryClient(network.get_context(), program)
    settings = client.get_settings()

    treasury_skey = Keypair()
    instructions = create_simple_treasury_and_fund_account(
        program, funder, treasury_skey.pubkey(), authority, settings.token, mode
    )
    signature = client.send(instructions, [funder_skey, treasury_skey])

    print(f"Created simple treasury {treasury_skey.pubkey()}")
    network.show_tx(signature)
    return signature, str(treasury_skey.pubkey())


def withdraw(
    treasury: str,
    recipient: str,
    amount: int,
    wallet: str = "creator",
    authority_wallet: str = None,
    program_id: str = default_program_id,
):
    """
    Withdraw ``amount`` from an unlocked simple treasury into the recipient token account
    """
    program = resolve_program_id(program_id)
    funder_skey, funder = get_signing_info(wallet)
    treasury = pubkey_from_string(treasury, "treasury")
    client = TreasuryClient(network.get_context(), program)
    simple_treasury = client.get_simple_treasury(treasury)
    if authority_wallet is None or authority_wallet == wallet:
        authority_skey = funder_skey
    else:
        authority_skey, _ = get_signing_info(authority_wallet)
    signers = authority_signers(simple_treasury.authority, funder_skey, authority_skey)
    if simple_treasury.mode != SimpleTreasuryMode.Unlocked:
        print(f"Treasury {treasury} is locked, the program will reject this withdrawal")

    instruction = withdraw_simple(
        program,
        funder,
        treasury,
        simple_treasury.authority,
        pubkey_from_string(recipient, "recipient"),
        simple_treasury.mint,
        amount,
    )
    signature = client.send([instruction], signers)

    network.show_tx(signature)
    return signature


if __name__ == "__main__":
    fire.Fire({"create": create, "withdraw": withdraw})
