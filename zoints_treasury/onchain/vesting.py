"""
Vesting arithmetic of vested treasuries.

Mirrors the program's integer computation: amounts are only truncated once, after
multiplying out ``initial_amount * vestment_percentage * ticks``.
"""
import datetime
import logging
import math
from dataclasses import dataclass
from typing import Optional, Union

from ..errors import InvalidArgument
from .accounts import VestedTreasury

_LOGGER = logging.getLogger(__name__)

BASIS_POINTS = 10_000

Instant = Union[int, float, datetime.datetime]


def to_unix_seconds(now: Instant) -> int:
    """
    Whole seconds since the epoch. Naive datetimes are taken to be UTC.
    """
    if isinstance(now, datetime.datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=datetime.timezone.utc)
        delta = now - datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
        return delta.days * 86400 + delta.seconds
    if isinstance(now, bool) or not isinstance(now, (int, float)):
        raise InvalidArgument("now", f"expected a timestamp, got {now!r}")
    return math.floor(now)


def _check_period(treasury: VestedTreasury):
    if treasury.vestment_period <= 0:
        raise InvalidArgument(
            "vestment_period", "a vested treasury with a zero period never vests"
        )


def elapsed_ticks(treasury: VestedTreasury, now: Instant) -> int:
    _check_period(treasury)
    elapsed = to_unix_seconds(now) - treasury.start
    if elapsed <= 0:
        return 0
    return elapsed // treasury.vestment_period


def maximum_available(treasury: VestedTreasury, now: Instant) -> int:
    """
    Total amount unlocked at ``now``, withdrawn or not
    """
    ticks = elapsed_ticks(treasury, now)
    if ticks == 0:
        return 0
    amount = (
        treasury.initial_amount * treasury.vestment_percentage * ticks
    ) // BASIS_POINTS
    return min(amount, treasury.initial_amount)


def available(treasury: VestedTreasury, now: Instant) -> int:
    """
    Amount the authority may withdraw at ``now``
    """
    unlocked = maximum_available(treasury, now)
    if treasury.withdrawn > unlocked:
        _LOGGER.warning(
            "Vested treasury of %s reports %d withdrawn but only %d unlocked",
            treasury.authority,
            treasury.withdrawn,
            unlocked,
        )
        return 0
    return unlocked - treasury.withdrawn


def fully_vested_at(treasury: VestedTreasury) -> Optional[int]:
    """
    First instant at which the whole initial amount is unlocked,
    None if the treasury never fully vests
    """
    _check_period(treasury)
    if treasury.initial_amount == 0:
        return treasury.start
    if treasury.vestment_percentage == 0:
        return None
    # initial * pct * k // 10000 >= initial  <=>  pct * k >= 10000
    ticks = -(-BASIS_POINTS // treasury.vestment_percentage)
    return treasury.start + ticks * treasury.vestment_period


@dataclass(frozen=True)
class VestingStatus:
    unlocked: int
    available: int
    withdrawn: int
    # unix timestamps in seconds, None if not applicable
    next_unlock: Optional[int]
    fully_vested_at: Optional[int]


def vesting_status(treasury: VestedTreasury, now: Instant) -> VestingStatus:
    unlocked = maximum_available(treasury, now)
    if unlocked < treasury.initial_amount and treasury.vestment_percentage > 0:
        next_unlock = treasury.start + (
            elapsed_ticks(treasury, now) + 1
        ) * treasury.vestment_period
    else:
        next_unlock = None
    return VestingStatus(
        unlocked=unlocked,
        available=available(treasury, now),
        withdrawn=treasury.withdrawn,
        next_unlock=next_unlock,
        fully_vested_at=fully_vested_at(treasury),
    )
