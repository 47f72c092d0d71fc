import logging
from dataclasses import dataclass, field

import numpy

from . import tables
from .bitstream import bits_to_codewords, encode_bitstream, select_version
from .codewords import interleave_blocks
from .errors import EmptyInput, InvalidErrorCorrectionLevel, InvalidMask, InvalidVersion, UnsupportedCharacters
from .masks import QrMask
from .matrix import ModuleArray
from .modes import Mode, select_mode
from .tables import ErrorCorrection

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Symbol:
    """A finished QR Code symbol.

    ``matrix`` is a read-only boolean array indexed ``[row, column]`` where
    ``True`` is a dark module. It has no quiet zone.
    """

    version: int
    error_correction: ErrorCorrection
    mode: Mode
    mask: int
    penalty: int
    matrix: numpy.ndarray = field(repr=False)

    @property
    def size(self):
        return self.matrix.shape[0]

    def is_dark(self, row, col):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"module ({row}, {col}) is outside a {self.size}x{self.size} symbol")
        return bool(self.matrix[row, col])

    def rows(self):
        return tuple(tuple(bool(module) for module in row) for row in self.matrix)

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return (self.version, self.error_correction, self.mask) == (other.version, other.error_correction, other.mask) \
            and numpy.array_equal(self.matrix, other.matrix)

    __hash__ = None


def parse_error_correction(level):
    if isinstance(level, ErrorCorrection):
        return level
    if isinstance(level, str):
        try:
            return ErrorCorrection[level.upper()]
        except KeyError:
            pass
    raise InvalidErrorCorrectionLevel(f"error correction level must be one of L, M, Q, H, not {level!r}")


def parse_mode(mode):
    if isinstance(mode, Mode):
        return mode
    if isinstance(mode, str):
        try:
            return Mode[mode.upper()]
        except KeyError:
            pass
    raise UnsupportedCharacters(f"mode must be one of {', '.join(m.name for m in Mode)}, not {mode!r}")


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def encode(data, error_correction="M", version=None, mask=None, mode=None):
    """Encode ``data`` into a QR Code symbol.

    ``data`` is ``bytes`` or ``str`` (text is encoded as UTF-8). The smallest
    version able to hold the data at ``error_correction`` is used unless
    ``version`` forces one; the lowest-penalty mask is used unless ``mask``
    forces one; the mode is picked from the data unless ``mode`` forces one.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)
    if not data:
        raise EmptyInput("data must not be empty")

    level = parse_error_correction(error_correction)
    if version is not None and not (_is_int(version) and tables.MIN_VERSION <= version <= tables.MAX_VERSION):
        raise InvalidVersion(f"version must be between {tables.MIN_VERSION} and {tables.MAX_VERSION}, not {version}")
    if mask is not None and not (_is_int(mask) and 0 <= mask <= 7):
        raise InvalidMask(f"mask must be between 0 and 7, not {mask}")

    if mode is None:
        mode = select_mode(data)
    else:
        mode = parse_mode(mode)
    if version is None:
        version = select_version(len(data), mode, level)
    logger.debug("encoding %d bytes as %s, version %d-%s", len(data), mode.name, version, level.name)

    data_bits = encode_bitstream(data, mode, version, level)
    cw_info = tables.codeword_counts(version, level)
    content_ints = interleave_blocks(bits_to_codewords(data_bits), cw_info)

    # convert the list of ints to a bitstring, followed by the version's remainder bits
    content_bits = "".join(f'{cont_int:08b}' for cont_int in content_ints)
    content_bits += "0" * tables.remainder_bits(version)

    module_arr = ModuleArray(version)
    module_arr.place_data(content_bits)

    qr_masks = QrMask(module_arr.modules_per_edge, level)
    mask, penalty = qr_masks.apply_best_mask(module_arr, mask)

    return Symbol(version, level, mode, mask, penalty, module_arr.freeze())
