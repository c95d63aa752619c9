"""
Custom error codes returned by the treasury program
"""
import re
from enum import IntEnum

from ..errors import TreasuryClientError


class TreasuryError(IntEnum):
    InvalidInstruction = 0
    AlreadyInitialized = 1
    NotInitialized = 2
    InvalidSettingsKey = 3
    MissingAuthoritySignature = 4
    InvalidTreasuryAddress = 5
    InvalidTreasuryOwner = 6
    InvalidTreasuryFundAuthorityAddress = 7
    InvalidTreasuryFundAddress = 8
    InvalidTreasuryFundAccount = 9
    TreasuryAlreadyExists = 10
    TokenNotSPLToken = 11
    MintInvalid = 12
    MintWrongToken = 13
    InvalidVestmentPercentage = 14
    InvalidVestmentPeriod = 15
    InvalidVestmentAmount = 16
    InvalidRecipient = 17
    InvalidRecipientAccount = 18


ERROR_MESSAGES = {
    TreasuryError.InvalidInstruction: "Invalid instruction",
    TreasuryError.AlreadyInitialized: "Program has already been initialized",
    TreasuryError.NotInitialized: "Program has not been initialized",
    TreasuryError.InvalidSettingsKey: "Invalid Settings Key",
    TreasuryError.MissingAuthoritySignature: "The authority did not sign the transaction",
    TreasuryError.InvalidTreasuryAddress: "Invalid Treasury Address",
    TreasuryError.InvalidTreasuryOwner: "Invalid Treasury Owner",
    TreasuryError.InvalidTreasuryFundAuthorityAddress: "Invalid Treasury Fund Authority Address",
    TreasuryError.InvalidTreasuryFundAddress: "Invalid Treasury Fund Address",
    TreasuryError.InvalidTreasuryFundAccount: "Invalid Treasury Fund Account",
    TreasuryError.TreasuryAlreadyExists: "Treasury Already Exists",
    TreasuryError.TokenNotSPLToken: "The token is not a valid SPL Token Mint",
    TreasuryError.MintInvalid: "Mint is invalid",
    TreasuryError.MintWrongToken: "Mint is for the wrong token",
    TreasuryError.InvalidVestmentPercentage: "Invalid Vestment Percentage (must be between 1 and 10,000)",
    TreasuryError.InvalidVestmentPeriod: "Invalid Vestment Period (must be > 0)",
    TreasuryError.InvalidVestmentAmount: "Invalid Vestment Amount (must be > 0)",
    TreasuryError.InvalidRecipient: "Invalid Recipient",
    TreasuryError.InvalidRecipientAccount: "Invalid Recipient Account",
}

_CUSTOM_ERROR_RE = re.compile(r"custom program error: (0x[0-9a-fA-F]+|\d+)")


class TreasuryProgramError(TreasuryClientError):
    """
    The program rejected a submitted transaction with one of its custom error codes.
    ``error`` is None for codes the client does not know.
    """

    def __init__(self, code: int):
        self.code = code
        try:
            self.error = TreasuryError(code)
        except ValueError:
            self.error = None
        message = (
            ERROR_MESSAGES[self.error]
            if self.error is not None
            else "Unknown treasury program error"
        )
        super().__init__(f"TREASURY-ERROR {code}: {message}")


def program_error_from_message(message: str):
    """
    Find the custom error code in a ledger error message or transaction log,
    returns None if there is none.
    """
    match = _CUSTOM_ERROR_RE.search(message)
    if match is None:
        return None
    return TreasuryProgramError(int(match.group(1), 0))
