import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from zoints_treasury.errors import DecodeError, InvalidArgument, NotFound
from zoints_treasury.offchain import addresses
from zoints_treasury.offchain.client import TreasuryClient
from zoints_treasury.offchain.instructions import initialize
from zoints_treasury.onchain.accounts import (
    Settings,
    SimpleTreasury,
    SimpleTreasuryMode,
    UserCommunity,
    VestedTreasury,
    ZointsCommunity,
)

T0 = 1_600_000_000


@pytest.fixture
def client(transport, program_id):
    return TreasuryClient(transport, program_id)


def test_get_settings(client, transport, program_id):
    settings = Settings(token=Pubkey.new_unique())
    address, _ = addresses.settings_address(program_id)
    transport.accounts[address] = settings.to_bytes()
    assert client.get_settings() == settings


def test_missing_account(client):
    treasury = Pubkey.new_unique()
    with pytest.raises(NotFound) as e:
        client.get_simple_treasury(treasury)
    assert e.value.address == treasury
    with pytest.raises(NotFound):
        client.get_settings()


def test_get_simple_treasury(client, transport):
    treasury = Pubkey.new_unique()
    record = SimpleTreasury(
        Pubkey.new_unique(), SimpleTreasuryMode.Unlocked, Pubkey.new_unique()
    )
    transport.accounts[treasury] = record.to_bytes()
    assert client.get_simple_treasury(treasury) == record
    assert client.get_simple_treasury(treasury) is not client.get_simple_treasury(
        treasury
    )


def test_corrupt_simple_treasury(client, transport):
    treasury = Pubkey.new_unique()
    transport.accounts[treasury] = bytes(64)
    with pytest.raises(DecodeError):
        client.get_simple_treasury(treasury)


def test_vested_available(client, transport):
    treasury = Pubkey.new_unique()
    record = VestedTreasury(
        mint=Pubkey.new_unique(),
        authority=Pubkey.new_unique(),
        initial_amount=100000,
        start=T0,
        vestment_period=10,
        vestment_percentage=1000,
        withdrawn=10000,
    )
    transport.accounts[treasury] = record.to_bytes()
    assert client.get_vested_treasury(treasury) == record
    assert client.vested_available(treasury, T0 + 10) == 0
    assert client.vested_available(treasury, T0 + 100) == 90000
    status = client.vested_status(treasury, T0 + 30)
    assert status.unlocked == 30000
    assert status.available == 20000


def test_communities(client, transport, program_id):
    user = Pubkey.new_unique()
    community = UserCommunity(authority=Pubkey.new_unique())
    address, _ = addresses.user_community_address(program_id, user)
    transport.accounts[address] = community.to_bytes()
    assert client.get_user_community(user) == community

    zoints = ZointsCommunity(authority=Pubkey.new_unique())
    address, _ = addresses.zoints_community_address(program_id, b"zoints")
    transport.accounts[address] = zoints.to_bytes()
    assert client.get_zoints_community("zoints") == zoints


def test_send(client, transport, program_id):
    funder = Keypair()
    instruction = initialize(program_id, funder.pubkey(), Pubkey.new_unique())
    assert client.send([instruction], [funder]) == "signature-1"
    assert transport.submitted == [([instruction], [funder])]


def test_send_nothing(client):
    with pytest.raises(InvalidArgument):
        client.send([], [Keypair()])
