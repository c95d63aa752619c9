"""
Client-side mirror of the account records persisted by the treasury program.

All layouts live in ``ACCOUNT_LAYOUTS`` and are encoded/decoded by one generic routine.
Changing a layout here without changing the program silently corrupts reads.
"""
from dataclasses import dataclass, fields
from enum import IntEnum
from typing import Dict, Type, TypeVar

from solders.pubkey import Pubkey

from ..errors import InvalidArgument
from .codec import (
    I64,
    PUBKEY,
    U8,
    U16,
    U64,
    IntEnumAdapter,
    Layout,
    check_i64,
    check_pubkey,
    check_u16,
    check_u64,
    decode_fields,
    encode_fields,
    layout_size,
)


class SimpleTreasuryMode(IntEnum):
    Locked = 0
    Unlocked = 1


def parse_mode(value) -> SimpleTreasuryMode:
    """
    Accepts a SimpleTreasuryMode or its ordinal, anything else is an InvalidArgument
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument("mode", f"expected a SimpleTreasuryMode, got {value!r}")
    try:
        return SimpleTreasuryMode(value)
    except ValueError:
        raise InvalidArgument(
            "mode", f"{value!r} is neither Locked (0) nor Unlocked (1)"
        ) from None


@dataclass(frozen=True)
class AccountData:
    """
    Immutable snapshot of an account. Every decode produces a fresh instance.
    """

    @classmethod
    def from_bytes(cls, data: bytes):
        return decode(cls, data)

    def to_bytes(self) -> bytes:
        return encode(self)

    def __post_init__(self):
        for f in fields(self):
            if f.type is Pubkey:
                check_pubkey(f"{type(self).__name__}.{f.name}", getattr(self, f.name))


@dataclass(frozen=True)
class Settings(AccountData):
    """
    Singleton configuration of a program deployment
    """

    # mint of the token this deployment operates on
    token: Pubkey


@dataclass(frozen=True)
class SimpleTreasury(AccountData):
    """
    Fund that the authority may withdraw from whenever it is unlocked
    """

    mint: Pubkey
    mode: SimpleTreasuryMode
    authority: Pubkey

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "mode", parse_mode(self.mode))


@dataclass(frozen=True)
class VestedTreasury(AccountData):
    """
    Fund that releases ``vestment_percentage`` basis points of the initial amount
    every ``vestment_period`` seconds after ``start``
    """

    mint: Pubkey
    authority: Pubkey
    initial_amount: int
    # unix timestamp in seconds
    start: int
    # seconds per vesting tick
    vestment_period: int
    # basis points per tick, 10000 == 100%
    vestment_percentage: int
    withdrawn: int

    def __post_init__(self):
        super().__post_init__()
        check_u64("VestedTreasury.initial_amount", self.initial_amount)
        check_i64("VestedTreasury.start", self.start)
        check_u64("VestedTreasury.vestment_period", self.vestment_period)
        check_u16("VestedTreasury.vestment_percentage", self.vestment_percentage)
        check_u64("VestedTreasury.withdrawn", self.withdrawn)


@dataclass(frozen=True)
class UserCommunity(AccountData):
    authority: Pubkey


@dataclass(frozen=True)
class ZointsCommunity(AccountData):
    authority: Pubkey


ACCOUNT_LAYOUTS: Dict[Type[AccountData], Layout] = {
    Settings: (("token", PUBKEY),),
    SimpleTreasury: (
        ("mint", PUBKEY),
        ("mode", IntEnumAdapter(U8, SimpleTreasuryMode)),
        ("authority", PUBKEY),
    ),
    VestedTreasury: (
        ("mint", PUBKEY),
        ("authority", PUBKEY),
        ("initial_amount", U64),
        ("start", I64),
        ("vestment_period", U64),
        ("vestment_percentage", U16),
        ("withdrawn", U64),
    ),
    UserCommunity: (("authority", PUBKEY),),
    ZointsCommunity: (("authority", PUBKEY),),
}

A = TypeVar("A", bound=AccountData)


def _layout(record_type: type) -> Layout:
    try:
        return ACCOUNT_LAYOUTS[record_type]
    except KeyError:
        raise InvalidArgument(
            "record_type", f"{record_type!r} is not a treasury account type"
        ) from None


def account_size(record_type: Type[AccountData]) -> int:
    return layout_size(_layout(record_type))


def decode(record_type: Type[A], data: bytes) -> A:
    values = decode_fields(record_type.__name__, _layout(record_type), bytes(data))
    return record_type(**values)


def encode(record: AccountData) -> bytes:
    layout = _layout(type(record))
    return encode_fields(
        type(record).__name__,
        layout,
        {name: getattr(record, name) for name, _ in layout},
    )
