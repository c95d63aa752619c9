import datetime
import logging

from hypothesis import assume, given
from hypothesis import strategies as st
import pytest
from solders.pubkey import Pubkey

from zoints_treasury.errors import InvalidArgument
from zoints_treasury.onchain.accounts import VestedTreasury
from zoints_treasury.onchain.vesting import (
    available,
    elapsed_ticks,
    fully_vested_at,
    maximum_available,
    to_unix_seconds,
    vesting_status,
)

T0 = 1_600_000_000


def make_treasury(**kwargs) -> VestedTreasury:
    params = dict(
        mint=Pubkey(b"\x01" * 32),
        authority=Pubkey(b"\x02" * 32),
        initial_amount=100000,
        start=T0,
        vestment_period=10,
        vestment_percentage=1000,
        withdrawn=0,
    )
    params.update(kwargs)
    return VestedTreasury(**params)


treasuries = st.builds(
    make_treasury,
    initial_amount=st.integers(min_value=0, max_value=2**64 - 1),
    start=st.integers(min_value=0, max_value=2**40),
    vestment_period=st.integers(min_value=1, max_value=100_000),
    vestment_percentage=st.integers(min_value=0, max_value=2**16 - 1),
    withdrawn=st.integers(min_value=0, max_value=2**64 - 1),
)
offsets = st.integers(min_value=-(10**9), max_value=10**10)


def test_first_tick():
    treasury = make_treasury()
    assert maximum_available(treasury, T0 + 10) == 10000
    assert available(treasury, T0 + 10) == 10000


def test_capped_at_initial_amount():
    treasury = make_treasury()
    assert maximum_available(treasury, T0 + 100) == 100000
    assert available(treasury, T0 + 100) == 100000
    assert maximum_available(treasury, T0 + 10**9) == 100000


def test_withdrawn_is_subtracted():
    treasury = make_treasury(withdrawn=10000)
    assert available(treasury, T0 + 10) == 0
    assert available(treasury, T0 + 25) == 10000


def test_partial_tick_does_not_unlock():
    treasury = make_treasury()
    assert maximum_available(treasury, T0 + 9) == 0
    assert maximum_available(treasury, T0 + 19) == 10000


def test_truncates_once():
    treasury = make_treasury(initial_amount=10, vestment_percentage=3333)
    assert maximum_available(treasury, T0 + 10) == 3
    assert maximum_available(treasury, T0 + 20) == 6
    # 0.7 per tick, truncating every tick would never unlock anything
    treasury = make_treasury(initial_amount=7, vestment_percentage=1000)
    assert maximum_available(treasury, T0 + 10) == 0
    assert maximum_available(treasury, T0 + 20) == 1


def test_large_amounts_do_not_lose_precision():
    treasury = make_treasury(initial_amount=2**64 - 1, vestment_percentage=1)
    ticks = 9999
    expected = (2**64 - 1) * ticks // 10000
    assert maximum_available(treasury, T0 + 10 * ticks) == expected


def test_withdrawn_above_unlocked_is_reported(caplog):
    treasury = make_treasury(withdrawn=50000)
    with caplog.at_level(logging.WARNING):
        assert available(treasury, T0 + 10) == 0
    assert "withdrawn" in caplog.text


def test_zero_period_is_rejected():
    with pytest.raises(InvalidArgument):
        maximum_available(make_treasury(vestment_period=0), T0 + 10)


def test_datetime_now():
    treasury = make_treasury()
    now = datetime.datetime.fromtimestamp(T0 + 10, datetime.timezone.utc)
    assert maximum_available(treasury, now) == 10000
    assert maximum_available(treasury, now.replace(tzinfo=None)) == 10000
    assert to_unix_seconds(now + datetime.timedelta(microseconds=999999)) == T0 + 10
    assert to_unix_seconds(T0 + 10.7) == T0 + 10
    assert to_unix_seconds(-1.5) == -2


@given(treasuries, st.integers(min_value=0, max_value=10**9))
def test_nothing_available_before_start(treasury, before):
    assert available(treasury, treasury.start - before) == 0
    assert elapsed_ticks(treasury, treasury.start - before) == 0


@given(treasuries, offsets, st.integers(min_value=0, max_value=10**9))
def test_monotone(treasury, offset, delta):
    t = treasury.start + offset
    assert maximum_available(treasury, t) <= maximum_available(treasury, t + delta)


@given(treasuries, offsets)
def test_capped(treasury, offset):
    assert maximum_available(treasury, treasury.start + offset) <= treasury.initial_amount


@given(treasuries, offsets)
def test_available_bounds(treasury, offset):
    t = treasury.start + offset
    assert 0 <= available(treasury, t) <= maximum_available(treasury, t)


@given(treasuries)
def test_fully_vested_at(treasury):
    assume(treasury.initial_amount > 0)
    end = fully_vested_at(treasury)
    if treasury.vestment_percentage == 0:
        assert end is None
        return
    assert maximum_available(treasury, end) == treasury.initial_amount
    if end - treasury.vestment_period > treasury.start:
        assert (
            maximum_available(treasury, end - treasury.vestment_period)
            < treasury.initial_amount
        )


def test_status():
    status = vesting_status(make_treasury(withdrawn=5000), T0 + 15)
    assert status.unlocked == 10000
    assert status.available == 5000
    assert status.withdrawn == 5000
    assert status.next_unlock == T0 + 20
    assert status.fully_vested_at == T0 + 100

    status = vesting_status(make_treasury(), T0 + 200)
    assert status.next_unlock is None

    status = vesting_status(make_treasury(), T0 - 5)
    assert status.unlocked == 0
    assert status.next_unlock == T0 + 10
