import json

import pytest

from solarb.fees import FeeStructure, Fraction
from solarb.pools import OrcaPool, PoolError, RaydiumPool, load_pool
from solarb.pubkey import Pubkey
from solarb.token import TokenAccount


def key(n: int) -> str:
    return str(Pubkey(bytes([n]) * 32))


MINT_HIGH = key(9)
MINT_LOW = key(3)
VAULT_HIGH = key(19)
VAULT_LOW = key(13)


def token_dict(mint: str, addr: str, scale: int) -> dict:
    return {"tag": "T", "name": "Tok", "mint": mint, "scale": scale, "addr": addr}


def fee_dict() -> dict:
    return {
        "traderFee": {"numerator": 25, "denominator": 10000},
        "ownerFee": {"numerator": 5, "denominator": 10000},
    }


def orca_dict(curve_type: int = 0) -> dict:
    return {
        "address": key(1),
        "nonce": 255,
        "authority": key(2),
        "poolTokenMint": key(4),
        "poolTokenDecimals": 6,
        "feeAccount": key(5),
        "tokenIds": [MINT_HIGH, MINT_LOW],
        "tokens": {
            MINT_HIGH: token_dict(MINT_HIGH, VAULT_HIGH, 9),
            MINT_LOW: token_dict(MINT_LOW, VAULT_LOW, 6),
        },
        "feeStructure": fee_dict(),
        "curveType": curve_type,
        "amp": 100,
    }


def raydium_dict() -> dict:
    data = orca_dict()
    for name in ("poolTokenMint", "poolTokenDecimals", "curveType", "amp"):
        del data[name]
    data["lpTokenMint"] = key(6)
    return data


def vault(amount: int) -> bytes:
    return TokenAccount(amount=amount).pack()


def test_orca_from_dict_fields():
    pool = OrcaPool.from_dict(orca_dict())
    assert pool.address == Pubkey.from_string(key(1))
    assert pool.nonce == 255
    assert pool.pool_token_decimals == 6
    assert pool.amp == 100
    assert pool.fee_structure == FeeStructure(Fraction(25, 10000), Fraction(5, 10000))
    assert pool.pool_amounts == {}


def test_orca_amp_defaults_to_zero():
    data = orca_dict()
    del data["amp"]
    assert OrcaPool.from_dict(data).amp == 0


def test_orca_round_trip():
    data = orca_dict()
    assert OrcaPool.from_dict(data).to_dict() == data


def test_orca_to_dict_leaves_out_amounts():
    pool = OrcaPool.from_dict(orca_dict())
    pool.set_update_accounts([vault(10), vault(20)])
    assert "poolAmounts" not in pool.to_dict()


def test_raydium_round_trip_keeps_amounts():
    data = raydium_dict()
    data["poolAmounts"] = {MINT_LOW: 7, MINT_HIGH: 2**70}
    pool = RaydiumPool.from_dict(data)
    assert pool.pool_amounts == {MINT_LOW: 7, MINT_HIGH: 2**70}
    assert RaydiumPool.from_dict(pool.to_dict()) == pool


def test_raydium_amounts_default_empty():
    assert RaydiumPool.from_dict(raydium_dict()).pool_amounts == {}


def test_mints_sorted():
    pool = OrcaPool.from_dict(orca_dict())
    mints = pool.mints()
    assert mints == sorted(mints)
    assert [str(m) for m in mints] == [MINT_LOW, MINT_HIGH]


def test_mint_lookups():
    pool = OrcaPool.from_dict(orca_dict())
    assert pool.mint_to_addr(MINT_HIGH) == Pubkey.from_string(VAULT_HIGH)
    assert pool.mint_to_scale(Pubkey.from_string(MINT_LOW)) == 6


def test_unknown_mint_raises():
    pool = RaydiumPool.from_dict(raydium_dict())
    with pytest.raises(PoolError):
        pool.mint_to_addr(key(77))
    with pytest.raises(PoolError):
        pool.mint_to_scale(key(77))


def test_update_accounts_follow_mint_order():
    pool = OrcaPool.from_dict(orca_dict())
    assert pool.update_accounts() == [pool.mint_to_addr(m) for m in pool.mints()]
    assert [str(a) for a in pool.update_accounts()] == [VAULT_LOW, VAULT_HIGH]


def test_set_update_accounts_records_amounts():
    pool = RaydiumPool.from_dict(raydium_dict())
    pool.set_update_accounts([vault(1000), vault(2500)])
    assert pool.pool_amounts == {MINT_LOW: 1000, MINT_HIGH: 2500}


def test_set_update_accounts_missing_account():
    pool = OrcaPool.from_dict(orca_dict())
    with pytest.raises(PoolError):
        pool.set_update_accounts([vault(1), None])
    with pytest.raises(PoolError):
        pool.set_update_accounts([vault(1)])


def test_set_update_accounts_bad_data():
    pool = OrcaPool.from_dict(orca_dict())
    with pytest.raises(PoolError):
        pool.set_update_accounts([b"\x00" * 10, vault(1)])


def test_can_trade():
    pool = OrcaPool.from_dict(orca_dict())
    pool.set_update_accounts([vault(5), vault(6)])
    assert pool.can_trade(MINT_LOW, MINT_HIGH) is True
    pool.set_update_accounts([vault(0), vault(6)])
    assert pool.can_trade(MINT_LOW, MINT_HIGH) is False


def test_curve_type_names():
    assert OrcaPool.from_dict(orca_dict(0)).curve_type_name() == "ConstantProduct"
    assert OrcaPool.from_dict(orca_dict(2)).curve_type_name() == "Stable"
    with pytest.raises(PoolError):
        OrcaPool.from_dict(orca_dict(1)).curve_type_name()


@pytest.mark.parametrize("missing", ["address", "tokenIds", "tokens", "feeStructure", "nonce"])
def test_missing_field_raises(missing):
    data = orca_dict()
    del data[missing]
    with pytest.raises(PoolError):
        OrcaPool.from_dict(data)


def test_bad_pubkey_raises():
    data = orca_dict()
    data["address"] = "0OIl"
    with pytest.raises(PoolError):
        OrcaPool.from_dict(data)


def test_negative_nonce_raises():
    data = raydium_dict()
    data["nonce"] = -1
    with pytest.raises(PoolError):
        RaydiumPool.from_dict(data)


def test_load_pool(tmp_path):
    orca_path = tmp_path / "orca.json"
    orca_path.write_text(json.dumps(orca_dict()))
    ray_path = tmp_path / "ray.json"
    ray_path.write_text(json.dumps(raydium_dict()))
    assert load_pool(orca_path, "orca") == OrcaPool.from_dict(orca_dict())
    assert load_pool(str(ray_path), "Raydium") == RaydiumPool.from_dict(raydium_dict())


def test_load_pool_errors(tmp_path):
    path = tmp_path / "pool.json"
    path.write_text(json.dumps(orca_dict()))
    with pytest.raises(PoolError):
        load_pool(path, "serum")
    path.write_text("{not json")
    with pytest.raises(PoolError):
        load_pool(path, "orca")
    path.write_text("[1, 2]")
    with pytest.raises(PoolError):
        load_pool(path, "orca")