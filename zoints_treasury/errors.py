"""
Error kinds raised by the treasury client.
"""
from typing import Sequence


class TreasuryClientError(Exception):
    """
    Base class of all errors raised by this package
    """


class DecodeError(TreasuryClientError, ValueError):
    """
    Raw bytes could not be decoded into the requested record or instruction.
    """

    def __init__(self, record: str, field: str = None, reason: str = ""):
        self.record = record
        self.field = field
        self.reason = reason
        location = f"{record}.{field}" if field else record
        super().__init__(f"Could not decode {location}: {reason}")


class NotFound(TreasuryClientError, LookupError):
    """
    No account exists at the requested address.
    """

    def __init__(self, address, record: str = None):
        self.address = address
        self.record = record
        what = f"{record} account" if record else "account"
        super().__init__(f"Unable to find {what} at {address}")


class InvalidArgument(TreasuryClientError, ValueError):
    """
    A value handed to a builder lies outside its declared domain.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class DerivationExhausted(TreasuryClientError):
    """
    No bump seed produced an off-curve program address. Fatal for these inputs.
    """

    def __init__(self, program_id, seeds: Sequence[bytes]):
        self.program_id = program_id
        self.seeds = tuple(seeds)
        super().__init__(
            f"Unable to find a viable program address for {program_id} "
            f"with seeds {[s.hex() for s in self.seeds]}"
        )
