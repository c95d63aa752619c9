import fire

from ..utils import get_signing_info, network
from ..utils import program_id as default_program_id
from .client import TreasuryClient
from .instructions import initialize
from .util import pubkey_from_string, resolve_program_id


def main(
    mint: str,
    wallet: str = "creator",
    program_id: str = default_program_id,
):
    """
    Create the settings account of the program for the given token mint
    """
    program = resolve_program_id(program_id)
    funder_skey, funder = get_signing_info(wallet)
    client = TreasuryClient(network.get_context(), program)

    signature = client.send(
        [initialize(program, funder, pubkey_from_string(mint, "mint"))],
        [funder_skey],
    )

    network.show_tx(signature)
    return signature


if __name__ == "__main__":
    fire.Fire(main)
