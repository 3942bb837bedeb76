"""Error codes of the on-chain arbitrage program."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Custom program errors, numbered from 6000 in declaration order."""

    NO_PROFIT = (6000, "NoProfit", "No profit at the end. Reverting...")
    INVALID_STATE = (6001, "InvalidState", "Trying to swap when information is invalid.")
    NOT_ENOUGH_FUNDS = (6002, "NotEnoughFunds", "Not enough funds: amount_in > src_balance.")
    RAYDIUM_SWAP_FAILED = (6003, "RaydiumSwapFailed", "Raydium swap failed")
    INVALID_RAYDIUM_POOL = (6004, "InvalidRaydiumPool", "Invalid Raydium pool state")

    def code(self) -> int:
        return self.value[0]

    def message(self) -> str:
        return self.value[2]

    @property
    def label(self) -> str:
        return self.value[1]


class ArbitrageError(Exception):
    """An error raised by the arbitrage program, carrying its error code."""

    def __init__(self, error_code: ErrorCode) -> None:
        self.error_code = error_code
        super().__init__(
            f"Error Code: {error_code.label}. Error Number: {error_code.code()}. "
            f"Error Message: {error_code.message()}"
        )


def error_from_code(code: int) -> ErrorCode:
    """Look up an error code by its number."""
    for error in ErrorCode:
        if error.code() == code:
            return error
    raise ValueError(f"unknown error code {code}")