import pytest

from solarb.pubkey import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    Pubkey,
    PubkeyError,
    b58decode,
    b58encode,
    create_program_address,
    derive_token_address,
    find_program_address,
    is_on_curve,
)


def test_default_pubkey_is_all_ones():
    assert str(Pubkey()) == "11111111111111111111111111111111"


def test_leading_zero_bytes_encode_as_ones():
    assert b58encode(b"\x00\x00\x01") == "112"
    assert b58decode("112") == b"\x00\x00\x01"


@pytest.mark.parametrize("data", [b"", b"\x00", b"hello world", bytes(range(40))])
def test_base58_round_trip(data):
    assert b58decode(b58encode(data)) == data


def test_invalid_base58_character():
    with pytest.raises(PubkeyError):
        b58decode("0OIl")


@pytest.mark.parametrize("text", [TOKEN_PROGRAM_ID, ASSOCIATED_TOKEN_PROGRAM_ID])
def test_pubkey_string_round_trip(text):
    key = Pubkey.from_string(text)
    assert str(key) == text
    assert len(key.to_bytes()) == 32


def test_wrong_length_rejected():
    with pytest.raises(PubkeyError):
        Pubkey(b"\x01" * 31)
    with pytest.raises(PubkeyError):
        Pubkey.from_string("112")


def test_ordering_follows_bytes():
    keys = [Pubkey(bytes([i]) * 32) for i in (5, 1, 3)]
    assert [k.to_bytes()[0] for k in sorted(keys)] == [1, 3, 5]


def test_identity_and_base_point_on_curve():
    assert is_on_curve(bytes([1]) + bytes(31))
    base = bytes.fromhex("5866666666666666666666666666666666666666666666666666666666666666")
    assert is_on_curve(base)


def test_find_program_address_invariants():
    program = Pubkey.from_string(TOKEN_PROGRAM_ID)
    seeds = [b"swap_state"]
    pda, bump = find_program_address(seeds, program)
    assert 0 <= bump <= 255
    assert not is_on_curve(pda.to_bytes())
    assert create_program_address([*seeds, bytes([bump])], program) == pda
    for higher in range(bump + 1, 256):
        with pytest.raises(PubkeyError):
            create_program_address([*seeds, bytes([higher])], program)


def test_seed_limits():
    program = Pubkey()
    with pytest.raises(PubkeyError):
        create_program_address([b"x" * 33], program)
    with pytest.raises(PubkeyError):
        create_program_address([b"x"] * 17, program)


def test_derive_token_address_is_deterministic_and_distinct():
    mint = Pubkey(bytes([7]) * 32)
    owner_a = Pubkey(bytes([1]) * 32)
    owner_b = Pubkey(bytes([2]) * 32)
    ata = derive_token_address(owner_a, mint, TOKEN_PROGRAM_ID, ASSOCIATED_TOKEN_PROGRAM_ID)
    assert ata == derive_token_address(owner_a, mint)
    assert ata != derive_token_address(owner_b, mint)
    assert not is_on_curve(ata.to_bytes())