import pytest

from solarb.errors import ArbitrageError, ErrorCode, error_from_code


def test_first_code():
    assert error_from_code(6000) is ErrorCode.NO_PROFIT


def test_codes_are_consecutive_in_order():
    looked_up = [error_from_code(6000 + offset) for offset in range(len(ErrorCode))]
    assert looked_up == list(ErrorCode)


def test_messages():
    assert ErrorCode.NO_PROFIT.message() == "No profit at the end. Reverting..."
    assert ErrorCode.NOT_ENOUGH_FUNDS.message() == "Not enough funds: amount_in > src_balance."
    assert ErrorCode.INVALID_RAYDIUM_POOL.message() == "Invalid Raydium pool state"


@pytest.mark.parametrize(
    ("number", "error"),
    [
        (6000, ErrorCode.NO_PROFIT),
        (6001, ErrorCode.INVALID_STATE),
        (6002, ErrorCode.NOT_ENOUGH_FUNDS),
        (6003, ErrorCode.RAYDIUM_SWAP_FAILED),
        (6004, ErrorCode.INVALID_RAYDIUM_POOL),
    ],
)
def test_lookup(number, error):
    assert error_from_code(number) is error


def test_unknown_code():
    with pytest.raises(ValueError):
        error_from_code(42)


def test_arbitrage_error_carries_code():
    error = ArbitrageError(ErrorCode.RAYDIUM_SWAP_FAILED)
    assert error.error_code is ErrorCode.RAYDIUM_SWAP_FAILED
    assert "Raydium swap failed" in str(error)
    assert "RaydiumSwapFailed" in str(error)