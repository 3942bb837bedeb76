# solarb

Building blocks for an on-chain token arbitrage client, in plain Python with
no third-party dependencies.

## What it provides

- `solarb.pubkey`: the `Pubkey` type, which is 32 bytes ordered by those
  bytes. It offers `Pubkey.from_string` and `to_bytes`, and `str()` gives
  base58. The module also has `b58encode` and `b58decode`, an ed25519 curve
  check (`is_on_curve`), program-derived addresses (`create_program_address`,
  `find_program_address`, which try bump seeds from 255 down) and associated
  token account derivation (`derive_token_address`).
- `solarb.token`: token metadata as stored in pool JSON files (`Token`, with
  `from_dict` and `to_dict`) and the 165-byte token account layout
  (`TokenAccount.pack`, `unpack_token_account`, `AccountState`).
- `solarb.fees`: the fee fractions that pool files carry (`Fraction`,
  `FeeStructure`, read from and written to `traderFee` and `ownerFee`).
- `solarb.errors`: the arbitrage program's error codes, 6000 to 6004
  (`ErrorCode` with `code()` and `message()`). It also has `ArbitrageError`,
  an exception that carries an `ErrorCode`, and `error_from_code`.
- `solarb.state`: account layouts with an 8-byte discriminator
  (`RaydiumSwapState`, `SwapState`, `ArbitrageState`, each with `pack` and
  `unpack`) and `account_discriminator`. Route plans are `RoutePlan`, made of
  `ArbitrageStep` items, each naming a `Dex`. There are program constants
  (`MIN_PROFIT_THRESHOLD`, `MAX_HOPS`, `PROFIT_SHARE_NUMERATOR`,
  `PROFIT_SHARE_DENOMINATOR`) and `open_orders_space`, which gives the size of
  an open-orders account for a known order-book program.
- `solarb.instructions`: `AccountMeta`, `Instruction` and `SwapData`. It
  builds swap instruction data (`orca_swap_data`, `raydium_swap_data`,
  `jupiter_route_data`) and full instructions from account sets
  (`OrcaSwapAccounts`, `RaydiumSwapAccounts`, `JupiterSwapAccounts`, each with
  `instruction(...)`). `raydium_swap_state_address` finds the swap state
  address of an authority.
- `solarb.graph`: `PoolGraph`, a directed multigraph keyed by `PoolIndex`
  (`add_quote`, `quotes`, `neighbours`). `read_json_dir` lists the `.json`
  files in a directory, sorted.
- `solarb.pools`: the `OrcaPool` and `RaydiumPool` models, loaded with
  `from_dict` or `load_pool(path, "orca" | "raydium")`. Both share the
  `TokenPool` behaviour: `mints` (sorted), `mint_to_addr`, `mint_to_scale`,
  `update_accounts`, `set_update_accounts` (vault balances read from raw
  token account data) and `can_trade`. `OrcaPool.curve_type_name` names the
  curve: 0 is `ConstantProduct` and 2 is `Stable`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from solarb.pools import load_pool
from solarb.graph import PoolGraph, PoolIndex

pool = load_pool("pools/orca/example_pool.json", "orca")
print(pool.curve_type_name(), [str(m) for m in pool.mints()])

graph = PoolGraph()
graph.add_quote(PoolIndex(0), PoolIndex(1), pool)
print(graph.quotes(0, 1))
```

This builds a Whirlpool swap instruction:

```python
from solarb.instructions import orca_swap_data

data = orca_swap_data(amount_in=1_000_000, minimum_amount_out=0)
```

This reads token account data:

```python
from solarb.token import unpack_token_account

account = unpack_token_account(raw_bytes)
print(account.mint, account.amount, account.state)
```

Bad input raises the package's own exceptions: `PubkeyError`,
`TokenAccountError`, `PoolError` (all `ValueError` subclasses) or
`ValueError`. `ArbitrageError` stands for the program's error codes.

## What it does not do

- It does not connect to a cluster. Nothing fetches accounts, signs
  transactions or sends them. `set_update_accounts` expects account data that
  the caller has already fetched.
- It does not compute swap quotes. The pools hold balances, fees and curve
  type, but no pricing curve is implemented.
- There is no Meteora swap builder. Only the program id constant
  `METEORA_PROGRAM_ID` is present.
- It has no command-line tool. There is no search for arbitrage routes and no
  setup of open-orders accounts.