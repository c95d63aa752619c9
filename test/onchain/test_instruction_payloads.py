import struct

import pytest

from zoints_treasury.errors import DecodeError, InvalidArgument
from zoints_treasury.onchain.accounts import SimpleTreasuryMode
from zoints_treasury.onchain.instruction import (
    TreasuryInstruction,
    decode_instruction,
    encode_instruction,
)


def test_discriminants():
    assert TreasuryInstruction.Initialize == 0
    assert TreasuryInstruction.CreateSimpleTreasury == 1
    assert TreasuryInstruction.WithdrawSimple == 2
    assert TreasuryInstruction.CreateVestedTreasury == 3
    assert TreasuryInstruction.WithdrawVested == 4


def test_encode_payloads():
    assert encode_instruction(TreasuryInstruction.Initialize) == b"\x00"
    assert (
        encode_instruction(
            TreasuryInstruction.CreateSimpleTreasury,
            {"mode": SimpleTreasuryMode.Unlocked},
        )
        == b"\x01\x01"
    )
    assert encode_instruction(
        TreasuryInstruction.WithdrawSimple, {"amount": 1231455}
    ) == bytes([2, 0x5F, 0xCA, 0x12, 0, 0, 0, 0, 0])
    assert encode_instruction(
        TreasuryInstruction.CreateVestedTreasury,
        {"amount": 8927423894, "period": 10, "percentage": 1000},
    ) == struct.pack("<BQQH", 3, 8927423894, 10, 1000)
    assert encode_instruction(TreasuryInstruction.WithdrawVested) == b"\x04"


def test_decode_payload():
    data = struct.pack("<BQQH", 3, 100000, 10, 1000)
    instruction, values = decode_instruction(data)
    assert instruction is TreasuryInstruction.CreateVestedTreasury
    assert values == {"amount": 100000, "period": 10, "percentage": 1000}

    instruction, values = decode_instruction(b"\x01\x00")
    assert instruction is TreasuryInstruction.CreateSimpleTreasury
    assert values == {"mode": SimpleTreasuryMode.Locked}


@pytest.mark.parametrize(
    "data",
    [b"", b"\x05", b"\xff", b"\x02\x01\x02", b"\x01\x02", b"\x03" + bytes(17)],
)
def test_decode_invalid_payloads(data):
    with pytest.raises(DecodeError):
        decode_instruction(data)


def test_encode_out_of_range():
    with pytest.raises(InvalidArgument):
        encode_instruction(TreasuryInstruction.WithdrawSimple, {"amount": 2**64})
    with pytest.raises(InvalidArgument):
        encode_instruction(
            TreasuryInstruction.CreateSimpleTreasury, {"mode": 7}
        )
