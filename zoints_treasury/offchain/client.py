"""
Typed reads of treasury accounts on top of a raw byte transport.
"""
import logging
from typing import Optional, Protocol, Sequence, Type, TypeVar

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..errors import InvalidArgument, NotFound
from ..onchain import vesting
from ..onchain.accounts import (
    AccountData,
    Settings,
    SimpleTreasury,
    UserCommunity,
    VestedTreasury,
    ZointsCommunity,
    decode,
)
from .addresses import (
    settings_address,
    user_community_address,
    zoints_community_address,
)

_LOGGER = logging.getLogger(__name__)

A = TypeVar("A", bound=AccountData)


class Transport(Protocol):
    def fetch(self, address: Pubkey) -> Optional[bytes]:
        """
        Raw data of the account at ``address``, None if there is no such account
        """

    def submit(
        self, instructions: Sequence[Instruction], signers: Sequence[Keypair]
    ) -> str:
        """
        Submit all instructions as one transaction, in order. The first signer pays.
        """


class TreasuryClient:
    def __init__(self, transport: Transport, program_id: Pubkey):
        self.transport = transport
        self.program_id = program_id

    def _get(self, record_type: Type[A], address: Pubkey) -> A:
        _LOGGER.debug("Fetching %s at %s", record_type.__name__, address)
        data = self.transport.fetch(address)
        if data is None:
            raise NotFound(address, record_type.__name__)
        return decode(record_type, data)

    def get_settings(self) -> Settings:
        address, _ = settings_address(self.program_id)
        return self._get(Settings, address)

    def get_simple_treasury(self, treasury: Pubkey) -> SimpleTreasury:
        return self._get(SimpleTreasury, treasury)

    def get_vested_treasury(self, treasury: Pubkey) -> VestedTreasury:
        return self._get(VestedTreasury, treasury)

    def get_user_community(self, user: Pubkey) -> UserCommunity:
        address, _ = user_community_address(self.program_id, user)
        return self._get(UserCommunity, address)

    def get_zoints_community(self, name) -> ZointsCommunity:
        address, _ = zoints_community_address(self.program_id, name)
        return self._get(ZointsCommunity, address)

    def vested_status(
        self, treasury: Pubkey, now: vesting.Instant
    ) -> vesting.VestingStatus:
        return vesting.vesting_status(self.get_vested_treasury(treasury), now)

    def vested_available(self, treasury: Pubkey, now: vesting.Instant) -> int:
        return vesting.available(self.get_vested_treasury(treasury), now)

    def send(
        self, instructions: Sequence[Instruction], signers: Sequence[Keypair]
    ) -> str:
        """
        Hands the instructions to the transport as a single transaction.
        """
        instructions = list(instructions)
        if not instructions:
            raise InvalidArgument("instructions", "nothing to submit")
        if not signers:
            raise InvalidArgument("signers", "at least the fee payer has to sign")
        return self.transport.submit(instructions, list(signers))
