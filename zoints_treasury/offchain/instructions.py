"""
Builders for the instructions of the treasury program.

Builders only derive addresses and encode payloads, they never touch the network.
Instructions returned together as a list have to be submitted as one transaction,
in the given order.
"""
from typing import List

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from spl.token.instructions import create_associated_token_account

from ..errors import InvalidArgument
from ..onchain.accounts import SimpleTreasuryMode, parse_mode
from ..onchain.codec import U16_MAX, U64_MAX, check_int, check_pubkey
from ..onchain.instruction import TreasuryInstruction, encode_instruction
from ..onchain.vesting import BASIS_POINTS
from .addresses import (
    associated_fund_address,
    settings_address,
    simple_treasury_fund_authority,
    vested_treasury_fund_authority,
)
from .util import (
    SYS_PROGRAM_ID,
    SYSVAR_CLOCK_PUBKEY,
    SYSVAR_RENT_PUBKEY,
    TOKEN_PROGRAM_ID,
    am,
)


def _check_keys(**keys):
    for name, key in keys.items():
        check_pubkey(name, key)


def _check_vestment(amount: int, period: int, percentage: int):
    check_int("amount", amount, 1, U64_MAX)
    check_int("period", period, 1, U64_MAX)
    check_int("percentage", percentage, 0, U16_MAX)
    if not 1 <= percentage <= BASIS_POINTS:
        raise InvalidArgument(
            "percentage", f"{percentage} basis points is not between 1 and 10,000"
        )


def initialize(program_id: Pubkey, funder: Pubkey, mint: Pubkey) -> Instruction:
    """
    Creates the settings account of a deployment.

    Accounts expected by the program:
      0. `[signer]` The account funding the instruction
      1. `[]` The token mint
      2. `[writable]` The settings account
      3. `[]` Rent sysvar
      4. `[]` System program
    """
    _check_keys(program_id=program_id, funder=funder, mint=mint)
    settings, _ = settings_address(program_id)
    keys = [
        am(funder, True, False),
        am(mint, False, False),
        am(settings, False, True),
        am(SYSVAR_RENT_PUBKEY, False, False),
        am(SYS_PROGRAM_ID, False, False),
    ]
    return Instruction(
        program_id, encode_instruction(TreasuryInstruction.Initialize), keys
    )


def create_simple_treasury(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    mint: Pubkey,
    mode: SimpleTreasuryMode = SimpleTreasuryMode.Locked,
) -> Instruction:
    """
    Accounts expected by the program:
      0. `[signer, writable]` The account funding the instruction
      1. `[]` The authority of the treasury
      2. `[signer, writable]` The new treasury account
      3. `[]` The fund account of the treasury
      4. `[]` The token mint
      5. `[]` The settings account
      6. `[]` Rent sysvar
      7. `[]` System program
      8. `[]` Token program
    """
    mode = parse_mode(mode)
    _check_keys(
        program_id=program_id,
        funder=funder,
        treasury=treasury,
        authority=authority,
        mint=mint,
    )
    settings, _ = settings_address(program_id)
    fund_authority, _ = simple_treasury_fund_authority(program_id, treasury)
    fund = associated_fund_address(fund_authority, mint)
    keys = [
        am(funder, True, True),
        am(authority, False, False),
        am(treasury, True, True),
        am(fund, False, False),
        am(mint, False, False),
        am(settings, False, False),
        am(SYSVAR_RENT_PUBKEY, False, False),
        am(SYS_PROGRAM_ID, False, False),
        am(TOKEN_PROGRAM_ID, False, False),
    ]
    data = encode_instruction(TreasuryInstruction.CreateSimpleTreasury, {"mode": mode})
    return Instruction(program_id, data, keys)


def create_simple_treasury_and_fund_account(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    mint: Pubkey,
    mode: SimpleTreasuryMode = SimpleTreasuryMode.Locked,
) -> List[Instruction]:
    """
    The fund account has to exist before the treasury is created,
    so the order of the returned instructions must be kept.
    """
    create_treasury = create_simple_treasury(
        program_id, funder, treasury, authority, mint, mode
    )
    fund_authority, _ = simple_treasury_fund_authority(program_id, treasury)
    return [
        create_associated_token_account(funder, fund_authority, mint),
        create_treasury,
    ]


def withdraw_simple(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    recipient: Pubkey,
    mint: Pubkey,
    amount: int,
) -> Instruction:
    """
    Accounts expected by the program:
      0. `[signer, writable]` The account funding the instruction
      1. `[signer]` The authority of the treasury
      2. `[]` The treasury account
      3. `[]` The fund authority of the treasury
      4. `[writable]` The fund account of the treasury
      5. `[writable]` The recipient token account
      6. `[]` The token mint
      7. `[]` The settings account
      8. `[]` Token program
    """
    check_int("amount", amount, 1, U64_MAX)
    _check_keys(
        program_id=program_id,
        funder=funder,
        treasury=treasury,
        authority=authority,
        recipient=recipient,
        mint=mint,
    )
    settings, _ = settings_address(program_id)
    fund_authority, _ = simple_treasury_fund_authority(program_id, treasury)
    fund = associated_fund_address(fund_authority, mint)
    keys = [
        am(funder, True, True),
        am(authority, True, False),
        am(treasury, False, False),
        am(fund_authority, False, False),
        am(fund, False, True),
        am(recipient, False, True),
        am(mint, False, False),
        am(settings, False, False),
        am(TOKEN_PROGRAM_ID, False, False),
    ]
    data = encode_instruction(TreasuryInstruction.WithdrawSimple, {"amount": amount})
    return Instruction(program_id, data, keys)


def create_vested_treasury(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    mint: Pubkey,
    amount: int,
    period: int,
    percentage: int,
) -> Instruction:
    """
    ``percentage`` is given in basis points unlocked per ``period`` seconds.

    Accounts expected by the program:
      0. `[signer, writable]` The account funding the instruction
      1. `[]` The authority of the treasury
      2. `[signer, writable]` The new treasury account
      3. `[]` The fund account of the treasury
      4. `[]` The token mint
      5. `[]` The settings account
      6. `[]` Rent sysvar
      7. `[]` System program
      8. `[]` Token program
    """
    _check_vestment(amount, period, percentage)
    _check_keys(
        program_id=program_id,
        funder=funder,
        treasury=treasury,
        authority=authority,
        mint=mint,
    )
    settings, _ = settings_address(program_id)
    fund_authority, _ = vested_treasury_fund_authority(program_id, treasury)
    fund = associated_fund_address(fund_authority, mint)
    keys = [
        am(funder, True, True),
        am(authority, False, False),
        am(treasury, True, True),
        am(fund, False, False),
        am(mint, False, False),
        am(settings, False, False),
        am(SYSVAR_RENT_PUBKEY, False, False),
        am(SYS_PROGRAM_ID, False, False),
        am(TOKEN_PROGRAM_ID, False, False),
    ]
    data = encode_instruction(
        TreasuryInstruction.CreateVestedTreasury,
        {"amount": amount, "period": period, "percentage": percentage},
    )
    return Instruction(program_id, data, keys)


def create_vested_treasury_and_fund_account(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    mint: Pubkey,
    amount: int,
    period: int,
    percentage: int,
) -> List[Instruction]:
    create_treasury = create_vested_treasury(
        program_id, funder, treasury, authority, mint, amount, period, percentage
    )
    fund_authority, _ = vested_treasury_fund_authority(program_id, treasury)
    return [
        create_associated_token_account(funder, fund_authority, mint),
        create_treasury,
    ]


def withdraw_vested(
    program_id: Pubkey,
    funder: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
    mint: Pubkey,
) -> Instruction:
    """
    Withdraws everything unlocked so far into the authority's associated token account.
    The program computes the unlocked amount itself from the clock sysvar.

    Accounts expected by the program:
      0. `[signer, writable]` The account funding the instruction
      1. `[signer]` The authority of the treasury
      2. `[writable]` The treasury account
      3. `[]` The fund authority of the treasury
      4. `[writable]` The fund account of the treasury
      5. `[writable]` The authority's associated token account
      6. `[]` The token mint
      7. `[]` The settings account
      8. `[]` Clock sysvar
      9. `[]` Token program
    """
    _check_keys(
        program_id=program_id,
        funder=funder,
        treasury=treasury,
        authority=authority,
        mint=mint,
    )
    settings, _ = settings_address(program_id)
    fund_authority, _ = vested_treasury_fund_authority(program_id, treasury)
    fund = associated_fund_address(fund_authority, mint)
    recipient = associated_fund_address(authority, mint)
    keys = [
        am(funder, True, True),
        am(authority, True, False),
        am(treasury, False, True),
        am(fund_authority, False, False),
        am(fund, False, True),
        am(recipient, False, True),
        am(mint, False, False),
        am(settings, False, False),
        am(SYSVAR_CLOCK_PUBKEY, False, False),
        am(TOKEN_PROGRAM_ID, False, False),
    ]
    data = encode_instruction(TreasuryInstruction.WithdrawVested)
    return Instruction(program_id, data, keys)
