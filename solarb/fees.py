"""Pool fee structures as stored in pool description files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_U64_MAX = 2**64 - 1


def _u64(data: dict[str, Any], key: str) -> int:
    try:
        value = data[key]
    except (KeyError, TypeError):
        raise ValueError(f"missing field {key!r}") from None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _U64_MAX:
        raise ValueError(f"field {key!r} must be an unsigned 64-bit integer")
    return value


@dataclass(frozen=True)
class Fraction:
    """A fee rate given as numerator over denominator."""

    numerator: int
    denominator: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Fraction":
        return cls(_u64(data, "numerator"), _u64(data, "denominator"))

    def to_dict(self) -> dict[str, int]:
        return {"numerator": self.numerator, "denominator": self.denominator}


@dataclass(frozen=True)
class FeeStructure:
    """Trader and owner fees of a pool."""

    trader_fee: Fraction
    owner_fee: Fraction

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FeeStructure":
        try:
            trader, owner = data["traderFee"], data["ownerFee"]
        except (KeyError, TypeError):
            raise ValueError("fee structure needs traderFee and ownerFee") from None
        return cls(Fraction.from_dict(trader), Fraction.from_dict(owner))

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"traderFee": self.trader_fee.to_dict(), "ownerFee": self.owner_fee.to_dict()}