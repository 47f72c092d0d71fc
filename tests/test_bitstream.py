import pytest

from qr_code_gen.bitstream import (
    bits_to_codewords,
    encode_bitstream,
    encode_payload,
    payload_bits,
    select_version,
)
from qr_code_gen.errors import DataTooLarge, UnsupportedCharacters
from qr_code_gen.modes import Mode
from qr_code_gen.tables import ErrorCorrection as EC


def test_hello_world_1m():
    bits = encode_bitstream(b"HELLO WORLD", Mode.ALPHANUMERIC, 1, EC.M)
    assert bits_to_codewords(bits) == [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]


def test_numeric_1m():
    bits = encode_bitstream(b"01234567", Mode.NUMERIC, 1, EC.M)
    assert bits_to_codewords(bits) == [16, 32, 12, 86, 97, 128, 236, 17, 236, 17, 236, 17, 236, 17, 236, 17]


def test_numeric_packing():
    assert encode_payload(b"012", Mode.NUMERIC) == "0000001100"
    assert encode_payload(b"0123", Mode.NUMERIC) == "0000001100" + "0011"
    assert encode_payload(b"01234", Mode.NUMERIC) == "0000001100" + "0100010"


def test_alphanumeric_packing():
    # "AC" = 10 * 45 + 12
    assert encode_payload(b"AC-", Mode.ALPHANUMERIC) == f"{462:011b}" + f"{41:06b}"


def test_byte_packing():
    assert encode_payload(b"\x00\xff", Mode.BYTE) == "00000000" + "11111111"


@pytest.mark.parametrize("length,mode,bits", [
    (0, Mode.NUMERIC, 0), (1, Mode.NUMERIC, 4), (2, Mode.NUMERIC, 7), (3, Mode.NUMERIC, 10), (8, Mode.NUMERIC, 27),
    (1, Mode.ALPHANUMERIC, 6), (2, Mode.ALPHANUMERIC, 11), (11, Mode.ALPHANUMERIC, 61),
    (5, Mode.BYTE, 40),
])
def test_payload_bits(length, mode, bits):
    assert payload_bits(length, mode) == bits
    assert len(encode_payload(b"1" * length, mode)) == bits


def test_terminator_is_cut_short_when_full():
    # 17 bytes fill 1-L up to 4 bits: only a 4 bit terminator fits, no pad bytes
    bits = encode_bitstream(b"a" * 17, Mode.BYTE, 1, EC.L)
    assert len(bits) == 19 * 8
    assert bits.endswith("0000")


def test_pad_bytes_alternate():
    codewords = bits_to_codewords(encode_bitstream(b"1", Mode.NUMERIC, 2, EC.L))
    assert len(codewords) == 34
    assert codewords[3:] == [236, 17] * 15 + [236]


@pytest.mark.parametrize("version", [1, 9, 10, 26, 27, 40])
def test_length_is_exact(version):
    for level in EC:
        bits = encode_bitstream(b"42", Mode.NUMERIC, version, level)
        assert len(bits) % 8 == 0
        assert set(bits) <= {"0", "1"}


def test_select_version_boundary():
    assert select_version(41, Mode.NUMERIC, EC.L) == 1
    assert select_version(42, Mode.NUMERIC, EC.L) == 2
    assert select_version(25, Mode.ALPHANUMERIC, EC.L) == 1
    assert select_version(26, Mode.ALPHANUMERIC, EC.L) == 2
    assert select_version(7, Mode.BYTE, EC.H) == 1
    assert select_version(8, Mode.BYTE, EC.H) == 2


def test_select_version_count_width_grows():
    # 9-L holds 230 bytes with an 8 bit count, version 10 needs a 16 bit count
    assert select_version(230, Mode.BYTE, EC.L) == 9
    assert select_version(231, Mode.BYTE, EC.L) == 10


def test_select_version_overflow():
    assert select_version(2953, Mode.BYTE, EC.L) == 40
    with pytest.raises(DataTooLarge):
        select_version(2954, Mode.BYTE, EC.L)
    with pytest.raises(DataTooLarge):
        select_version(7090, Mode.NUMERIC, EC.L)


def test_forced_version_too_small():
    with pytest.raises(DataTooLarge):
        encode_bitstream(b"1" * 42, Mode.NUMERIC, 1, EC.L)


def test_unsupported_characters():
    with pytest.raises(UnsupportedCharacters):
        encode_payload(b"12a", Mode.NUMERIC)
    with pytest.raises(UnsupportedCharacters):
        encode_payload(b"hello", Mode.ALPHANUMERIC)
    with pytest.raises(UnsupportedCharacters):
        encode_payload(b"\x88\x9f", Mode.KANJI)
