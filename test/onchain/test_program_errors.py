from zoints_treasury.onchain.program_errors import (
    TreasuryError,
    TreasuryProgramError,
    program_error_from_message,
)


def test_error_from_hex_code():
    error = program_error_from_message(
        "Transaction simulation failed: Error processing Instruction 1: custom program error: 0xe"
    )
    assert isinstance(error, TreasuryProgramError)
    assert error.code == 14
    assert error.error is TreasuryError.InvalidVestmentPercentage
    assert "between 1 and 10,000" in str(error)


def test_error_from_decimal_code():
    error = program_error_from_message("custom program error: 10")
    assert error.error is TreasuryError.TreasuryAlreadyExists


def test_unknown_code():
    error = TreasuryProgramError(0x1000)
    assert error.error is None
    assert error.code == 0x1000


def test_no_custom_error():
    assert program_error_from_message("Blockhash not found") is None
