"""Two-token liquidity pools described by JSON pool files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Optional, Sequence, Union

from solarb.fees import FeeStructure
from solarb.pubkey import Pubkey, PubkeyError
from solarb.token import Token, TokenAccountError, unpack_token_account

_U64_MAX = 2**64 - 1
_U128_MAX = 2**128 - 1

_CURVE_TYPES = {0: "ConstantProduct", 2: "Stable"}

KeyLike = Union[Pubkey, str]


class PoolError(ValueError):
    """Raised for malformed pool descriptions or lookups of unknown mints."""


def _field(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError):
        raise PoolError(f"missing pool field {key!r}") from None


def _uint(value: Any, key: str, limit: int = _U64_MAX) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise PoolError(f"field {key!r} must be an unsigned integer, got {value!r}")
    return value


def _pubkey(value: Any, key: str) -> Pubkey:
    if not isinstance(value, str):
        raise PoolError(f"field {key!r} must be a base58 string")
    try:
        return Pubkey.from_string(value)
    except PubkeyError as exc:
        raise PoolError(f"field {key!r}: {exc}") from None


def _token_ids(data: dict[str, Any]) -> list[str]:
    ids = _field(data, "tokenIds")
    if not isinstance(ids, list) or not all(isinstance(item, str) for item in ids):
        raise PoolError("field 'tokenIds' must be a list of strings")
    return list(ids)


def _tokens(data: dict[str, Any]) -> dict[str, Token]:
    raw = _field(data, "tokens")
    if not isinstance(raw, dict):
        raise PoolError("field 'tokens' must be an object")
    try:
        return {str(mint): Token.from_dict(token) for mint, token in raw.items()}
    except (ValueError, TypeError) as exc:
        raise PoolError(f"invalid token: {exc}") from None


def _fee_structure(data: dict[str, Any]) -> FeeStructure:
    try:
        return FeeStructure.from_dict(_field(data, "feeStructure"))
    except PoolError:
        raise
    except ValueError as exc:
        raise PoolError(f"invalid fee structure: {exc}") from None


def _account_data(account: Any) -> bytes:
    if account is None:
        raise PoolError("pool vault account is missing")
    data = getattr(account, "data", account)
    return bytes(data)


class TokenPool:
    """Behaviour shared by pools holding two tokens in vaults."""

    NAME: ClassVar[str] = ""

    token_ids: list[str]
    tokens: dict[str, Token]
    pool_amounts: dict[str, int]

    def _token(self, mint: KeyLike) -> Token:
        try:
            return self.tokens[str(mint)]
        except KeyError:
            raise PoolError(f"{self.NAME} pool has no token with mint {mint}") from None

    def mint_to_addr(self, mint: KeyLike) -> Pubkey:
        """The pool's vault address for a mint."""
        return self._token(mint).addr

    def mint_to_scale(self, mint: KeyLike) -> int:
        """The decimal scale of a mint."""
        return self._token(mint).scale

    def mints(self) -> list[Pubkey]:
        """The pool's mints, sorted so that every pool lists a pair the same way."""
        return sorted(_pubkey(token_id, "tokenIds") for token_id in self.token_ids)

    def update_accounts(self) -> list[Pubkey]:
        """Vault accounts whose balances the pool needs, in mint order."""
        return [self.mint_to_addr(mint) for mint in self.mints()]

    def set_update_accounts(self, accounts: Sequence[Optional[Any]]) -> None:
        """Record vault balances from fetched account data, in update_accounts order."""
        ids = [str(mint) for mint in self.mints()]
        if len(ids) < 2 or len(accounts) < 2:
            raise PoolError("a pool needs two mints and two vault accounts")
        for mint_id, account in zip(ids[:2], accounts[:2]):
            try:
                amount = unpack_token_account(_account_data(account)).amount
            except TokenAccountError as exc:
                raise PoolError(f"invalid vault account for {mint_id}: {exc}") from None
            self.pool_amounts[mint_id] = amount

    def can_trade(self, mint_in: KeyLike, mint_out: KeyLike) -> bool:
        """A pool can trade unless one of its known vault balances is empty."""
        return all(amount != 0 for amount in self.pool_amounts.values())


@dataclass
class OrcaPool(TokenPool):
    """A token-swap pool with a constant-product or stable curve."""

    address: Pubkey
    nonce: int
    authority: Pubkey
    pool_token_mint: Pubkey
    pool_token_decimals: int
    fee_account: Pubkey
    token_ids: list[str]
    tokens: dict[str, Token]
    fee_structure: FeeStructure
    curve_type: int
    amp: int = 0
    pool_amounts: dict[str, int] = field(default_factory=dict)

    NAME: ClassVar[str] = "Orca"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrcaPool":
        return cls(
            address=_pubkey(_field(data, "address"), "address"),
            nonce=_uint(_field(data, "nonce"), "nonce"),
            authority=_pubkey(_field(data, "authority"), "authority"),
            pool_token_mint=_pubkey(_field(data, "poolTokenMint"), "poolTokenMint"),
            pool_token_decimals=_uint(
                _field(data, "poolTokenDecimals"), "poolTokenDecimals"
            ),
            fee_account=_pubkey(_field(data, "feeAccount"), "feeAccount"),
            token_ids=_token_ids(data),
            tokens=_tokens(data),
            fee_structure=_fee_structure(data),
            curve_type=_uint(_field(data, "curveType"), "curveType", 255),
            amp=_uint(data.get("amp", 0), "amp"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": str(self.address),
            "nonce": self.nonce,
            "authority": str(self.authority),
            "poolTokenMint": str(self.pool_token_mint),
            "poolTokenDecimals": self.pool_token_decimals,
            "feeAccount": str(self.fee_account),
            "tokenIds": list(self.token_ids),
            "tokens": {mint: token.to_dict() for mint, token in self.tokens.items()},
            "feeStructure": self.fee_structure.to_dict(),
            "curveType": self.curve_type,
            "amp": self.amp,
        }

    def curve_type_name(self) -> str:
        """Name of the pool's pricing curve."""
        try:
            return _CURVE_TYPES[self.curve_type]
        except KeyError:
            raise PoolError(f"invalid curve type: {self.curve_type}") from None


@dataclass
class RaydiumPool(TokenPool):
    """An automated market maker pool."""

    address: Pubkey
    nonce: int
    authority: Pubkey
    lp_token_mint: Pubkey
    fee_account: Pubkey
    token_ids: list[str]
    tokens: dict[str, Token]
    fee_structure: FeeStructure
    pool_amounts: dict[str, int] = field(default_factory=dict)

    NAME: ClassVar[str] = "Raydium"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RaydiumPool":
        raw_amounts = data.get("poolAmounts", {})
        if not isinstance(raw_amounts, dict):
            raise PoolError("field 'poolAmounts' must be an object")
        return cls(
            address=_pubkey(_field(data, "address"), "address"),
            nonce=_uint(_field(data, "nonce"), "nonce"),
            authority=_pubkey(_field(data, "authority"), "authority"),
            lp_token_mint=_pubkey(_field(data, "lpTokenMint"), "lpTokenMint"),
            fee_account=_pubkey(_field(data, "feeAccount"), "feeAccount"),
            token_ids=_token_ids(data),
            tokens=_tokens(data),
            fee_structure=_fee_structure(data),
            pool_amounts={
                str(mint): _uint(amount, "poolAmounts", _U128_MAX)
                for mint, amount in raw_amounts.items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": str(self.address),
            "nonce": self.nonce,
            "authority": str(self.authority),
            "lpTokenMint": str(self.lp_token_mint),
            "feeAccount": str(self.fee_account),
            "tokenIds": list(self.token_ids),
            "tokens": {mint: token.to_dict() for mint, token in self.tokens.items()},
            "feeStructure": self.fee_structure.to_dict(),
            "poolAmounts": dict(self.pool_amounts),
        }


_POOL_KINDS: dict[str, type[Union[OrcaPool, RaydiumPool]]] = {
    "orca": OrcaPool,
    "raydium": RaydiumPool,
}


def load_pool(path: Union[str, Path], kind: str) -> Union[OrcaPool, RaydiumPool]:
    """Read a pool description file of the given kind ("orca" or "raydium")."""
    try:
        pool_cls = _POOL_KINDS[kind.lower()]
    except KeyError:
        raise PoolError(f"unknown pool kind {kind!r}") from None
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise PoolError(f"{path}: invalid JSON: {exc}") from None
    if not isinstance(data, dict):
        raise PoolError(f"{path}: a pool description must be a JSON object")
    return pool_cls.from_dict(data)