"""
Instruction payloads understood by the treasury program.

Every payload starts with a one byte discriminant followed by the operation specific
fields of ``INSTRUCTION_LAYOUTS``.
"""
from enum import IntEnum
from typing import Any, Dict, Mapping, Tuple

from ..errors import DecodeError
from .accounts import SimpleTreasuryMode
from .codec import U16, U64, U8, IntEnumAdapter, Layout, decode_fields, encode_fields


class TreasuryInstruction(IntEnum):
    Initialize = 0
    CreateSimpleTreasury = 1
    WithdrawSimple = 2
    CreateVestedTreasury = 3
    WithdrawVested = 4


INSTRUCTION_LAYOUTS: Dict[TreasuryInstruction, Layout] = {
    TreasuryInstruction.Initialize: (),
    TreasuryInstruction.CreateSimpleTreasury: (
        ("mode", IntEnumAdapter(U8, SimpleTreasuryMode)),
    ),
    TreasuryInstruction.WithdrawSimple: (("amount", U64),),
    TreasuryInstruction.CreateVestedTreasury: (
        ("amount", U64),
        ("period", U64),
        ("percentage", U16),
    ),
    TreasuryInstruction.WithdrawVested: (),
}

DISCRIMINANT = IntEnumAdapter(U8, TreasuryInstruction)


def encode_instruction(
    instruction: TreasuryInstruction, values: Mapping[str, Any] = None
) -> bytes:
    instruction = TreasuryInstruction(instruction)
    return DISCRIMINANT.build(instruction) + encode_fields(
        instruction.name, INSTRUCTION_LAYOUTS[instruction], values or {}
    )


def decode_instruction(data: bytes) -> Tuple[TreasuryInstruction, Dict[str, Any]]:
    """
    Inverse of encode_instruction. Trailing bytes beyond the payload are ignored.
    """
    data = bytes(data)
    if not data:
        raise DecodeError("TreasuryInstruction", "discriminant", "empty payload")
    try:
        instruction = TreasuryInstruction(data[0])
    except ValueError:
        raise DecodeError(
            "TreasuryInstruction",
            "discriminant",
            f"unknown instruction {data[0]}",
        ) from None
    values = decode_fields(
        instruction.name, INSTRUCTION_LAYOUTS[instruction], data[1:]
    )
    return instruction, values
