import logging

from . import tables
from .errors import DataTooLarge, UnsupportedCharacters
from .modes import ALPHANUMERIC_CHARS, Mode, is_alphanumeric, is_numeric

logger = logging.getLogger(__name__)

PAD_BYTES = "1110110000010001"  # 0xEC 0x11


def payload_bits(length, mode):
    """Number of bits the payload of ``length`` units takes in ``mode``."""
    if mode is Mode.NUMERIC:
        groups, rest = divmod(length, 3)
        return groups * 10 + (0, 4, 7)[rest]
    if mode is Mode.ALPHANUMERIC:
        pairs, rest = divmod(length, 2)
        return pairs * 11 + rest * 6
    if mode is Mode.BYTE:
        return length * 8
    raise UnsupportedCharacters("Kanji mode is not supported")


def required_bits(length, mode, version):
    return 4 + tables.char_count_bits(version, mode) + payload_bits(length, mode)


def select_version(length, mode, level):
    # the smallest version whose data capacity holds header and payload
    for version in range(tables.MIN_VERSION, tables.MAX_VERSION + 1):
        if tables.data_bit_capacity(version, level) >= required_bits(length, mode, version):
            return version
    raise DataTooLarge(
        f"{length} {mode.name.lower()} characters do not fit any version at level {level.name}; "
        f"the maximum is {tables.character_capacity(tables.MAX_VERSION, level, mode)}"
    )


def _encode_numeric(data):
    encoded = ""
    for i in range(0, len(data), 3):
        chunk = data[i:i + 3]
        encoded += f'{int(chunk):0{(0, 4, 7, 10)[len(chunk)]}b}'
    return encoded


def _encode_alphanumeric(data):
    encoded = ""
    for i in range(0, len(data), 2):
        chunk = data[i:i + 2]
        if len(chunk) == 2:
            value = ALPHANUMERIC_CHARS.index(chunk[0]) * 45 + ALPHANUMERIC_CHARS.index(chunk[1])
            encoded += f'{value:011b}'
        else:
            encoded += f'{ALPHANUMERIC_CHARS.index(chunk[0]):06b}'
    return encoded


def _encode_bytes(data):
    return "".join(f'{byte:08b}' for byte in data)


def encode_payload(data, mode):
    if mode is Mode.NUMERIC:
        if not is_numeric(data):
            raise UnsupportedCharacters("numeric mode only holds the digits 0-9")
        return _encode_numeric(data)
    if mode is Mode.ALPHANUMERIC:
        if not is_alphanumeric(data):
            raise UnsupportedCharacters("alphanumeric mode only holds 0-9, A-Z and ' $%*+-./:'")
        return _encode_alphanumeric(data)
    if mode is Mode.BYTE:
        return _encode_bytes(data)
    raise UnsupportedCharacters("Kanji mode is not supported")


def encode_bitstream(data, mode, version, level):
    """Build the complete data bit string for one symbol.

    Returns a string of '0'/'1' characters whose length is exactly the data
    codeword capacity of ``version`` at ``level`` times eight.
    """
    max_data_bits = tables.data_bit_capacity(version, level)
    count_width = tables.char_count_bits(version, mode)

    data_bits = mode.indicator + f'{len(data):0{count_width}b}' + encode_payload(data, mode)
    if len(data_bits) > max_data_bits:
        raise DataTooLarge(f"data needs {len(data_bits)} bits, version {version}-{level.name} holds {max_data_bits}")

    # add up to 4 zeroes as a terminator, making sure we don't go over the max length
    data_bits += "0" * min(4, max_data_bits - len(data_bits))

    # make the length of the bitstring a multiple of 8
    data_bits += "0" * (-len(data_bits) % 8)

    # add padding bytes until we reach the required size
    while len(data_bits) < max_data_bits:
        data_bits += PAD_BYTES
    # if we went over by one byte, remove the extra byte
    data_bits = data_bits[:max_data_bits]

    assert len(data_bits) == max_data_bits
    logger.debug("bitstream: %d bits for %d %s characters", len(data_bits), len(data), mode.name)
    return data_bits


def bits_to_codewords(bits):
    return [int(bits[i:i + 8], 2) for i in range(0, len(bits), 8)]
