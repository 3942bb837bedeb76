"""Base58 public keys, program-derived addresses and token account addresses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}

_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P

MAX_SEEDS = 16
MAX_SEED_LEN = 32
PDA_MARKER = b"ProgramDerivedAddress"
PUBKEY_BYTES = 32

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"


class PubkeyError(ValueError):
    """Raised for malformed keys, bad seeds or failed address derivation."""


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    data = bytes(data)
    number = int.from_bytes(data, "big")
    chars = []
    while number:
        number, rem = divmod(number, 58)
        chars.append(_ALPHABET[rem])
    pad = len(data) - len(data.lstrip(b"\0"))
    return "1" * pad + "".join(reversed(chars))


def b58decode(text: str) -> bytes:
    """Decode a base58 string into bytes."""
    number = 0
    for ch in text:
        try:
            number = number * 58 + _INDEX[ch]
        except KeyError:
            raise PubkeyError(f"invalid base58 character {ch!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    pad = len(text) - len(text.lstrip("1"))
    return b"\0" * pad + body


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte public key, ordered by its raw bytes."""

    raw: bytes = bytes(PUBKEY_BYTES)

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_BYTES:
            raise PubkeyError(f"public key must be {PUBKEY_BYTES} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_string(cls, text: str) -> "Pubkey":
        return cls(b58decode(text))

    def to_bytes(self) -> bytes:
        return self.raw

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return b58encode(self.raw)

    def __repr__(self) -> str:
        return f"Pubkey('{self}')"


def _as_pubkey(value: Pubkey | str) -> Pubkey:
    return value if isinstance(value, Pubkey) else Pubkey.from_string(value)


def is_on_curve(data: bytes) -> bool:
    """Tell whether 32 bytes decompress to a point on the ed25519 curve."""
    data = bytes(data)
    if len(data) != PUBKEY_BYTES:
        raise PubkeyError("a compressed point is 32 bytes")
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    yy = y * y % _P
    u = (yy - 1) % _P
    v = (_D * yy + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


def create_program_address(seeds: Iterable[bytes], program_id: Pubkey | str) -> Pubkey:
    """Derive an off-curve address from seeds and a program id."""
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) > MAX_SEEDS:
        raise PubkeyError("too many seeds")
    if any(len(seed) > MAX_SEED_LEN for seed in seeds):
        raise PubkeyError("seed too long")
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(_as_pubkey(program_id).to_bytes())
    digest.update(PDA_MARKER)
    hashed = digest.digest()
    if is_on_curve(hashed):
        raise PubkeyError("derived address lies on the curve")
    return Pubkey(hashed)


def find_program_address(
    seeds: Iterable[bytes], program_id: Pubkey | str
) -> tuple[Pubkey, int]:
    """Find the first valid address trying bump seeds from 255 down to 0."""
    seeds = [bytes(seed) for seed in seeds]
    for bump in range(255, -1, -1):
        try:
            return create_program_address([*seeds, bytes([bump])], program_id), bump
        except PubkeyError:
            if len(seeds) + 1 > MAX_SEEDS or any(len(s) > MAX_SEED_LEN for s in seeds):
                raise
    raise PubkeyError("no viable bump seed found")


def derive_token_address(
    owner: Pubkey | str,
    mint: Pubkey | str,
    token_program_id: Pubkey | str = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey | str = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Pubkey:
    """Return the associated token account of an owner for a mint."""
    seeds = [
        _as_pubkey(owner).to_bytes(),
        _as_pubkey(token_program_id).to_bytes(),
        _as_pubkey(mint).to_bytes(),
    ]
    address, _ = find_program_address(seeds, associated_token_program_id)
    return address