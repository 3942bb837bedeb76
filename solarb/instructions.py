"""Instruction data and account lists for the swaps the arbitrage program performs."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields
from typing import Union

from solarb.pubkey import Pubkey, find_program_address

PROGRAM_ID = "Fg6PaFpoGXkYsidMpWTK6W2BeZ7FEfcYkg476zPFsLnS"
WHIRLPOOL_PROGRAM_ID = "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"
RAYDIUM_AMM_V4_PROGRAM_ID = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
JUPITER_PROGRAM_ID = "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB"
METEORA_PROGRAM_ID = "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo"

ORCA_SWAP_DISCRIMINATOR = 2
RAYDIUM_SWAP_DISCRIMINATOR = 9
RAYDIUM_SWAP_STATE_SEED = b"raydium_swap_state"

_U64_MAX = 2**64 - 1
_AMOUNTS = struct.Struct("<QQ")

KeyLike = Union[Pubkey, str]


def _key(value: KeyLike) -> Pubkey:
    return value if isinstance(value, Pubkey) else Pubkey.from_string(value)


def _u64(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value!r}")
    return value


def _amounts(amount_in: int, minimum_amount_out: int) -> bytes:
    return _AMOUNTS.pack(
        _u64(amount_in, "amount_in"), _u64(minimum_amount_out, "minimum_amount_out")
    )


@dataclass(frozen=True)
class AccountMeta:
    """An account passed to an instruction, with its signer and writable flags."""

    pubkey: Pubkey
    is_signer: bool = False
    is_writable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "pubkey", _key(self.pubkey))


@dataclass(frozen=True)
class Instruction:
    """A program call: target program, ordered accounts and raw data."""

    program_id: Pubkey
    accounts: tuple[AccountMeta, ...] = field(default_factory=tuple)
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "program_id", _key(self.program_id))
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "data", bytes(self.data))


def _writable(key: Pubkey) -> AccountMeta:
    return AccountMeta(key, is_signer=False, is_writable=True)


def _readonly(key: Pubkey, signer: bool = False) -> AccountMeta:
    return AccountMeta(key, is_signer=signer, is_writable=False)


@dataclass(frozen=True)
class SwapData:
    """Amounts of a swap: what goes in and the least that must come out."""

    amount_in: int
    minimum_amount_out: int

    def pack(self) -> bytes:
        return _amounts(self.amount_in, self.minimum_amount_out)

    @classmethod
    def unpack(cls, data: bytes) -> "SwapData":
        data = bytes(data)
        if len(data) != _AMOUNTS.size:
            raise ValueError(f"swap data must be {_AMOUNTS.size} bytes, got {len(data)}")
        return cls(*_AMOUNTS.unpack(data))


def orca_swap_data(amount_in: int, minimum_amount_out: int) -> bytes:
    """Whirlpool swap data: no price limit, amount is input, a to b."""
    return (
        bytes([ORCA_SWAP_DISCRIMINATOR])
        + _amounts(amount_in, minimum_amount_out)
        + bytes([0, 1, 1])
    )


def raydium_swap_data(amount_in: int, minimum_amount_out: int) -> bytes:
    """Raydium AMM swap data."""
    return bytes([RAYDIUM_SWAP_DISCRIMINATOR]) + _amounts(amount_in, minimum_amount_out)


def jupiter_route_data(amount_in: int, minimum_amount_out: int, route_data: bytes) -> bytes:
    """Jupiter route data: the two amounts followed by the route itself."""
    return _amounts(amount_in, minimum_amount_out) + bytes(route_data)


def raydium_swap_state_address(
    authority: KeyLike, program_id: KeyLike = PROGRAM_ID
) -> tuple[Pubkey, int]:
    """Address and bump of an authority's swap state account."""
    return find_program_address([RAYDIUM_SWAP_STATE_SEED, _key(authority).to_bytes()], program_id)


class _Accounts:
    """Turns every key field given as a string into a Pubkey."""

    def __post_init__(self) -> None:
        for item in fields(self):  # type: ignore[arg-type]
            setattr(self, item.name, _key(getattr(self, item.name)))


@dataclass
class OrcaSwapAccounts(_Accounts):
    """Accounts of a Whirlpool swap."""

    token_program: Pubkey
    token_authority: Pubkey
    whirlpool: Pubkey
    token_owner_account_a: Pubkey
    token_vault_a: Pubkey
    token_owner_account_b: Pubkey
    token_vault_b: Pubkey
    tick_array_0: Pubkey
    tick_array_1: Pubkey
    tick_array_2: Pubkey
    oracle: Pubkey
    whirlpool_program: Pubkey = field(default=WHIRLPOOL_PROGRAM_ID)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        super().__post_init__()
        if str(self.whirlpool_program) != WHIRLPOOL_PROGRAM_ID:
            raise ValueError(f"whirlpool_program must be {WHIRLPOOL_PROGRAM_ID}")

    def instruction(self, amount_in: int, minimum_amount_out: int) -> Instruction:
        accounts = [
            _writable(self.whirlpool),
            _readonly(self.token_program),
            _readonly(self.token_authority, signer=True),
            _writable(self.token_owner_account_a),
            _writable(self.token_vault_a),
            _writable(self.token_owner_account_b),
            _writable(self.token_vault_b),
            _writable(self.tick_array_0),
            _writable(self.tick_array_1),
            _writable(self.tick_array_2),
            _writable(self.oracle),
        ]
        return Instruction(
            self.whirlpool_program, accounts, orca_swap_data(amount_in, minimum_amount_out)
        )


@dataclass
class RaydiumSwapAccounts(_Accounts):
    """Accounts of a Raydium AMM swap routed through an order book."""

    amm_id: Pubkey
    amm_authority: Pubkey
    amm_open_orders: Pubkey
    pool_coin_token_account: Pubkey
    pool_pc_token_account: Pubkey
    serum_program_id: Pubkey
    serum_market: Pubkey
    serum_bids: Pubkey
    serum_asks: Pubkey
    serum_event_queue: Pubkey
    serum_coin_vault_account: Pubkey
    serum_pc_vault_account: Pubkey
    serum_vault_signer: Pubkey
    user_source_token: Pubkey
    user_destination_token: Pubkey
    user_authority: Pubkey
    token_program: Pubkey
    swap_state: Pubkey

    def instruction(self, amount_in: int, minimum_amount_out: int) -> Instruction:
        accounts = [
            _writable(self.amm_id),
            _writable(self.amm_authority),
            _writable(self.amm_open_orders),
            _writable(self.pool_coin_token_account),
            _writable(self.pool_pc_token_account),
            _readonly(self.serum_program_id),
            _writable(self.serum_market),
            _writable(self.serum_bids),
            _writable(self.serum_asks),
            _writable(self.serum_event_queue),
            _writable(self.serum_coin_vault_account),
            _writable(self.serum_pc_vault_account),
            _readonly(self.serum_vault_signer),
            _writable(self.user_source_token),
            _writable(self.user_destination_token),
            _readonly(self.user_authority, signer=True),
            _readonly(self.token_program),
        ]
        return Instruction(
            self.amm_id, accounts, raydium_swap_data(amount_in, minimum_amount_out)
        )


@dataclass
class JupiterSwapAccounts(_Accounts):
    """Accounts of a Jupiter route swap."""

    token_program: Pubkey
    user_authority: Pubkey
    user_source_token: Pubkey
    user_destination_token: Pubkey
    remaining_accounts: Pubkey
    jupiter_program: Pubkey = field(default=JUPITER_PROGRAM_ID)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        super().__post_init__()
        if str(self.jupiter_program) != JUPITER_PROGRAM_ID:
            raise ValueError(f"jupiter_program must be {JUPITER_PROGRAM_ID}")

    def instruction(
        self, amount_in: int, minimum_amount_out: int, route_data: bytes
    ) -> Instruction:
        accounts = [
            _readonly(self.token_program),
            _readonly(self.user_authority, signer=True),
            _writable(self.user_source_token),
            _writable(self.user_destination_token),
        ]
        return Instruction(
            self.jupiter_program,
            accounts,
            jupiter_route_data(amount_in, minimum_amount_out, route_data),
        )