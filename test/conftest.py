import pytest
from solders.pubkey import Pubkey


class FakeTransport:
    """
    In-memory ledger: raw account data by address, records every submission
    """

    def __init__(self):
        self.accounts = {}
        self.submitted = []

    def fetch(self, address):
        return self.accounts.get(address)

    def submit(self, instructions, signers):
        self.submitted.append((list(instructions), list(signers)))
        return f"signature-{len(self.submitted)}"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def program_id():
    return Pubkey.new_unique()
