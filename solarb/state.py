"""On-chain account layouts, route plans and program constants."""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from solarb.pubkey import Pubkey

MIN_PROFIT_THRESHOLD = 100
MAX_HOPS = 4
PROFIT_SHARE_NUMERATOR = 50
PROFIT_SHARE_DENOMINATOR = 100

DISCRIMINATOR_LEN = 8
LAYOUT_V1_SPAN = 3220
LAYOUT_V2_SPAN = 3228

_PROGRAM_LAYOUT_VERSIONS = {
    "4ckmDgGdxQoPDLUkDT3vHgSAkzA3QRdNq5ywwY4sUSJn": 1,
    "BJ3jrUzddfuSrZHXSCxMUUQsjKEyLmuuyZebkcaFp2fg": 1,
    "EUqojwWA2rd19FZrzeBncJsm38Jm1hEhE3zsmX3bRc2o": 2,
    "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin": 3,
}

_U64_MAX = 2**64 - 1
_I64_MIN, _I64_MAX = -(2**63), 2**63 - 1


def account_discriminator(name: str) -> bytes:
    """The 8-byte prefix identifying an account type by its name."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_LEN]


def _u64(value: int, name: str) -> int:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} out of u64 range: {value}")
    return value


def _bool(byte: int) -> bool:
    if byte not in (0, 1):
        raise ValueError(f"invalid boolean byte {byte}")
    return bool(byte)


def _body(name: str, data: bytes) -> bytes:
    data = bytes(data)
    if data[:DISCRIMINATOR_LEN] != account_discriminator(name):
        raise ValueError(f"account discriminator mismatch for {name}")
    return data[DISCRIMINATOR_LEN:]


def _unpack(layout: struct.Struct, body: bytes) -> tuple:
    if len(body) < layout.size:
        raise ValueError(f"account data too short: need {layout.size} bytes")
    return layout.unpack_from(body)


@dataclass
class RaydiumSwapState:
    """Per-authority swap state account."""

    bump: int = 0
    authority: Pubkey = Pubkey()
    initialized: bool = False
    last_swap_timestamp: int = 0

    LEN: ClassVar[int] = DISCRIMINATOR_LEN + 1 + 32 + 1 + 8
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<B32sBq")

    def pack(self) -> bytes:
        if not 0 <= self.bump <= 255:
            raise ValueError(f"bump out of range: {self.bump}")
        if not _I64_MIN <= self.last_swap_timestamp <= _I64_MAX:
            raise ValueError("last_swap_timestamp out of i64 range")
        return account_discriminator("RaydiumSwapState") + self._LAYOUT.pack(
            self.bump, self.authority.to_bytes(), int(self.initialized), self.last_swap_timestamp
        )

    @classmethod
    def unpack(cls, data: bytes) -> "RaydiumSwapState":
        bump, authority, initialized, timestamp = _unpack(
            cls._LAYOUT, _body("RaydiumSwapState", data)
        )
        return cls(bump, Pubkey(authority), _bool(initialized), timestamp)


@dataclass
class SwapState:
    """State tracked across the swaps of one arbitrage."""

    start_balance: int = 0
    swap_input: int = 0
    is_valid: bool = False
    input_token: Pubkey = Pubkey()
    current_token: Pubkey = Pubkey()

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<QQB32s32s")

    def pack(self) -> bytes:
        return account_discriminator("SwapState") + self._LAYOUT.pack(
            _u64(self.start_balance, "start_balance"),
            _u64(self.swap_input, "swap_input"),
            int(self.is_valid),
            self.input_token.to_bytes(),
            self.current_token.to_bytes(),
        )

    @classmethod
    def unpack(cls, data: bytes) -> "SwapState":
        start, swap_input, valid, input_token, current = _unpack(
            cls._LAYOUT, _body("SwapState", data)
        )
        return cls(start, swap_input, _bool(valid), Pubkey(input_token), Pubkey(current))


@dataclass
class ArbitrageState:
    """Running totals of an arbitrage authority."""

    authority: Pubkey = Pubkey()
    total_profit: int = 0
    total_trades: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<32sQQ")

    def pack(self) -> bytes:
        return account_discriminator("ArbitrageState") + self._LAYOUT.pack(
            self.authority.to_bytes(),
            _u64(self.total_profit, "total_profit"),
            _u64(self.total_trades, "total_trades"),
        )

    @classmethod
    def unpack(cls, data: bytes) -> "ArbitrageState":
        authority, profit, trades = _unpack(cls._LAYOUT, _body("ArbitrageState", data))
        return cls(Pubkey(authority), profit, trades)


class Dex(IntEnum):
    """Exchanges a route step can go through, in variant order."""

    ORCA = 0
    RAYDIUM = 1
    METEORA = 2
    JUPITER = 3


@dataclass(frozen=True)
class ArbitrageStep:
    """One hop of a route: the exchange and the amount it carries."""

    dex: Dex
    amount: int

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<BQ")

    def pack(self) -> bytes:
        return self._LAYOUT.pack(int(Dex(self.dex)), _u64(self.amount, "amount"))

    @classmethod
    def _read(cls, data: bytes, offset: int) -> tuple["ArbitrageStep", int]:
        if len(data) - offset < cls._LAYOUT.size:
            raise ValueError("route step truncated")
        variant, amount = cls._LAYOUT.unpack_from(data, offset)
        try:
            dex = Dex(variant)
        except ValueError:
            raise ValueError(f"unknown route step variant {variant}") from None
        return cls(dex, amount), offset + cls._LAYOUT.size


@dataclass
class RoutePlan:
    """A sequence of swaps from an input token to an output token."""

    steps: list[ArbitrageStep] = field(default_factory=list)
    input_token: Pubkey = Pubkey()
    output_token: Pubkey = Pubkey()
    minimum_output_amount: int = 0

    _TAIL: ClassVar[struct.Struct] = struct.Struct("<32s32sQ")

    def pack(self) -> bytes:
        return (
            struct.pack("<I", len(self.steps))
            + b"".join(step.pack() for step in self.steps)
            + self._TAIL.pack(
                self.input_token.to_bytes(),
                self.output_token.to_bytes(),
                _u64(self.minimum_output_amount, "minimum_output_amount"),
            )
        )

    @classmethod
    def unpack(cls, data: bytes) -> "RoutePlan":
        data = bytes(data)
        if len(data) < 4:
            raise ValueError("route plan truncated")
        (count,) = struct.unpack_from("<I", data)
        offset = 4
        steps = []
        for _ in range(count):
            step, offset = ArbitrageStep._read(data, offset)
            steps.append(step)
        if len(data) - offset != cls._TAIL.size:
            raise ValueError("route plan has wrong length")
        input_token, output_token, minimum = cls._TAIL.unpack_from(data, offset)
        return cls(steps, Pubkey(input_token), Pubkey(output_token), minimum)


def open_orders_space(dex_program_id: Pubkey | str) -> int:
    """Size of an open-orders account for the given order-book program."""
    try:
        version = _PROGRAM_LAYOUT_VERSIONS[str(dex_program_id)]
    except KeyError:
        raise ValueError(f"unknown order-book program {dex_program_id}") from None
    return LAYOUT_V1_SPAN if version == 1 else LAYOUT_V2_SPAN