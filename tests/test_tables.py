import pytest

from aeslab.cipher.tables import (
    INV_SBOX,
    MUL2,
    MUL3,
    MUL9,
    MUL11,
    MUL13,
    MUL14,
    RCON,
    SBOX,
    gf_multiply,
    xtime,
)


def test_sbox_known_entries():
    assert SBOX[0x00] == 0x63
    assert SBOX[0x53] == 0xED
    assert SBOX[0xFF] == 0x16


def test_inverse_sbox_roundtrip():
    for b in range(256):
        assert INV_SBOX[SBOX[b]] == b
        assert SBOX[INV_SBOX[b]] == b


def test_tables_are_immutable():
    with pytest.raises(TypeError):
        SBOX[0] = 0  # type: ignore[index]
    with pytest.raises(TypeError):
        MUL2[1] = 0  # type: ignore[index]


def test_gf_multiply_fips_examples():
    # FIPS-197 section 4.2
    assert gf_multiply(0x57, 0x83) == 0xC1
    assert gf_multiply(0x57, 0x13) == 0xFE
    assert xtime(0x57) == 0xAE
    assert xtime(0xAE) == 0x47


def test_gf_multiply_identity_and_zero():
    for b in range(256):
        assert gf_multiply(b, 1) == b
        assert gf_multiply(b, 0) == 0
        assert gf_multiply(b, 2) == gf_multiply(2, b)


@pytest.mark.parametrize(
    "table,constant",
    [(MUL2, 2), (MUL3, 3), (MUL9, 9), (MUL11, 11), (MUL13, 13), (MUL14, 14)],
)
def test_multiply_tables_match_gf_multiply(table, constant):
    assert len(table) == 256
    for b in range(256):
        assert table[b] == gf_multiply(b, constant)
        assert 0 <= table[b] <= 0xFF


def test_rcon_indexed_from_one():
    assert RCON[1:11] == (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36)
