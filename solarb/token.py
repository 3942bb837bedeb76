"""Token descriptions from pool files and the on-chain token account layout."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional

from solarb.pubkey import Pubkey

TOKEN_ACCOUNT_LEN = 165
_LAYOUT = struct.Struct("<32s32sQ36sB12sQ36s")
_COPTION_NONE = b"\x00\x00\x00\x00"
_COPTION_SOME = b"\x01\x00\x00\x00"
_U64_MAX = 2**64 - 1


class TokenAccountError(ValueError):
    """Raised when token account data cannot be decoded or encoded."""


class AccountState(IntEnum):
    """State of a token account."""

    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


@dataclass
class Token:
    """A token of a pool: its mint, decimal scale and the pool's vault address."""

    tag: str
    name: str
    mint: Pubkey
    scale: int
    addr: Pubkey

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        try:
            return cls(
                tag=str(data["tag"]),
                name=str(data["name"]),
                mint=Pubkey.from_string(data["mint"]),
                scale=int(data["scale"]),
                addr=Pubkey.from_string(data["addr"]),
            )
        except KeyError as exc:
            raise ValueError(f"missing token field {exc.args[0]!r}") from None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "name": self.name,
            "mint": str(self.mint),
            "scale": self.scale,
            "addr": str(self.addr),
        }


def _check_u64(value: int, name: str) -> int:
    if not 0 <= value <= _U64_MAX:
        raise TokenAccountError(f"{name} out of u64 range: {value}")
    return value


def _pack_key_option(key: Optional[Pubkey]) -> bytes:
    if key is None:
        return _COPTION_NONE + bytes(32)
    return _COPTION_SOME + key.to_bytes()


def _pack_u64_option(value: Optional[int]) -> bytes:
    if value is None:
        return _COPTION_NONE + bytes(8)
    return _COPTION_SOME + struct.pack("<Q", _check_u64(value, "is_native"))


def _unpack_key_option(src: bytes) -> Optional[Pubkey]:
    tag, body = src[:4], src[4:]
    if tag == _COPTION_NONE:
        return None
    if tag == _COPTION_SOME:
        return Pubkey(body)
    raise TokenAccountError("invalid account data: bad option tag")


def _unpack_u64_option(src: bytes) -> Optional[int]:
    tag, body = src[:4], src[4:]
    if tag == _COPTION_NONE:
        return None
    if tag == _COPTION_SOME:
        return int.from_bytes(body, "little")
    raise TokenAccountError("invalid account data: bad option tag")


@dataclass
class TokenAccount:
    """Decoded token account."""

    mint: Pubkey = Pubkey()
    owner: Pubkey = Pubkey()
    amount: int = 0
    delegate: Optional[Pubkey] = None
    state: AccountState = AccountState.UNINITIALIZED
    is_native: Optional[int] = None
    delegated_amount: int = 0
    close_authority: Optional[Pubkey] = None

    def pack(self) -> bytes:
        """Encode into the 165-byte on-chain layout."""
        return _LAYOUT.pack(
            self.mint.to_bytes(),
            self.owner.to_bytes(),
            _check_u64(self.amount, "amount"),
            _pack_key_option(self.delegate),
            int(AccountState(self.state)),
            _pack_u64_option(self.is_native),
            _check_u64(self.delegated_amount, "delegated_amount"),
            _pack_key_option(self.close_authority),
        )


def unpack_token_account(data: bytes) -> TokenAccount:
    """Decode the first 165 bytes of account data as a token account."""
    data = bytes(data)
    if len(data) < TOKEN_ACCOUNT_LEN:
        raise TokenAccountError(
            f"token account data needs {TOKEN_ACCOUNT_LEN} bytes, got {len(data)}"
        )
    mint, owner, amount, delegate, state, is_native, delegated, close = _LAYOUT.unpack(
        data[:TOKEN_ACCOUNT_LEN]
    )
    try:
        account_state = AccountState(state)
    except ValueError:
        raise TokenAccountError(f"invalid account state {state}") from None
    return TokenAccount(
        mint=Pubkey(mint),
        owner=Pubkey(owner),
        amount=amount,
        delegate=_unpack_key_option(delegate),
        state=account_state,
        is_native=_unpack_u64_option(is_native),
        delegated_amount=delegated,
        close_authority=_unpack_key_option(close),
    )