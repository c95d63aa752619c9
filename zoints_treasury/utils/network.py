"""
Transport to a solana cluster via JSON-RPC.
"""
import logging
from typing import Optional, Sequence

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from ..onchain.program_errors import program_error_from_message
from . import commitment, rpc_url

_LOGGER = logging.getLogger(__name__)


class SolanaTransport:
    def __init__(self, client: Client):
        self.client = client

    def fetch(self, address: Pubkey) -> Optional[bytes]:
        account = self.client.get_account_info(address).value
        if account is None:
            return None
        return bytes(account.data)

    def submit(
        self, instructions: Sequence[Instruction], signers: Sequence[Keypair]
    ) -> str:
        """
        Sends all instructions in one transaction so they apply atomically, in order.
        The first signer pays the fees.
        """
        blockhash = self.client.get_latest_blockhash().value.blockhash
        message = Message.new_with_blockhash(
            list(instructions), signers[0].pubkey(), blockhash
        )
        tx = Transaction(list(signers), message, blockhash)
        try:
            signature = self.client.send_transaction(
                tx,
                opts=TxOpts(
                    skip_confirmation=False,
                    preflight_commitment=Commitment(commitment),
                ),
            ).value
        except RPCException as e:
            program_error = program_error_from_message(str(e))
            if program_error is not None:
                raise program_error from e
            raise
        _LOGGER.info("Submitted transaction %s", signature)
        return str(signature)


def get_context(url: str = None) -> SolanaTransport:
    return SolanaTransport(Client(url or rpc_url, commitment=Commitment(commitment)))


def show_tx(signature: str):
    print(f"transaction id: {signature}")
    print(
        f"https://explorer.solana.com/tx/{signature}?cluster=custom&customUrl={rpc_url}"
    )
