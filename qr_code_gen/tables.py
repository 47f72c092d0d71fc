import enum

from .modes import Mode

MIN_VERSION = 1
MAX_VERSION = 40


class ErrorCorrection(enum.Enum):
    # values are the 2-bit indicators written into the format information
    L = 0b01
    M = 0b00
    Q = 0b11
    H = 0b10


# column order of the per-level tables below
_LEVEL_COLUMN = {ErrorCorrection.L: 0, ErrorCorrection.M: 1, ErrorCorrection.Q: 2, ErrorCorrection.H: 3}

# total error correction codewords of the whole symbol, (L, M, Q, H) per version
TOTAL_EC_CODEWORDS = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

# number of Reed-Solomon blocks, (L, M, Q, H) per version
NUM_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)

# centre coordinates of the alignment patterns; version 1 has none
ALIGNMENT_PATTERN_LOCS = (
    (),
    (6, 18),
    (6, 22),
    (6, 26),
    (6, 30),
    (6, 34),
    (6, 22, 38),
    (6, 24, 42),
    (6, 26, 46),
    (6, 28, 50),
    (6, 30, 54),
    (6, 32, 58),
    (6, 34, 62),
    (6, 26, 46, 66),
    (6, 26, 48, 70),
    (6, 26, 50, 74),
    (6, 30, 54, 78),
    (6, 30, 56, 82),
    (6, 30, 58, 86),
    (6, 34, 62, 90),
    (6, 28, 50, 72, 94),
    (6, 26, 50, 74, 98),
    (6, 30, 54, 78, 102),
    (6, 28, 54, 80, 106),
    (6, 32, 58, 84, 110),
    (6, 30, 58, 86, 114),
    (6, 34, 62, 90, 118),
    (6, 26, 50, 74, 98, 122),
    (6, 30, 54, 78, 102, 126),
    (6, 26, 52, 78, 104, 130),
    (6, 30, 56, 82, 108, 134),
    (6, 34, 60, 86, 112, 138),
    (6, 30, 58, 86, 114, 142),
    (6, 34, 62, 90, 118, 146),
    (6, 30, 54, 78, 102, 126, 150),
    (6, 24, 50, 76, 102, 128, 154),
    (6, 28, 54, 80, 106, 132, 158),
    (6, 32, 58, 84, 110, 136, 162),
    (6, 26, 54, 82, 110, 138, 166),
    (6, 30, 58, 86, 114, 142, 170),
)

# character count indicator widths for versions 1-9, 10-26 and 27-40
CHAR_COUNT_BITS = {
    Mode.NUMERIC: (10, 12, 14),
    Mode.ALPHANUMERIC: (9, 11, 13),
    Mode.BYTE: (8, 16, 16),
    Mode.KANJI: (8, 10, 12),
}


def _check_version(version):
    assert MIN_VERSION <= version <= MAX_VERSION, f"version {version} out of range"


def modules_per_edge(version):
    _check_version(version)
    return version * 4 + 17


def raw_data_modules(version):
    """Number of modules left for data and EC bits once every function pattern,
    the format areas and (version 7+) the version areas are taken out.
    """
    _check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def total_codewords(version):
    return raw_data_modules(version) // 8


def remainder_bits(version):
    return raw_data_modules(version) % 8


def char_count_bits(version, mode):
    _check_version(version)
    widths = CHAR_COUNT_BITS[mode]
    if version <= 9:
        return widths[0]
    if version <= 26:
        return widths[1]
    return widths[2]


# object that holds all the information about any specific version and error correction level QR code
class CodewordCounts:

    def __init__(self, groups, eccw_count):
        self.groups = [tuple(group) for group in groups]
        self.block_counts = []
        self.data_cw_counts = []
        self.max_data_bits = 0
        for group in groups:
            self.block_counts.append(group[0])
            self.data_cw_counts.append(group[1])
            self.max_data_bits += (group[0] * group[1])
        self.max_data_bits *= 8
        self.groups_count = len(groups)
        self.eccw_count = eccw_count

    @property
    def data_codewords(self):
        return self.max_data_bits // 8

    @property
    def block_count(self):
        return sum(self.block_counts)

    @property
    def total_codewords(self):
        return self.data_codewords + self.eccw_count * self.block_count

    def __repr__(self):
        return f"CodewordCounts({[list(g) for g in self.groups]}, {self.eccw_count})"


def _build_codeword_blocks():
    blocks = {}
    for version in range(MIN_VERSION, MAX_VERSION + 1):
        total = total_codewords(version)
        for level, column in _LEVEL_COLUMN.items():
            ec_total = TOTAL_EC_CODEWORDS[version - 1][column]
            num_blocks = NUM_BLOCKS[version - 1][column]
            assert ec_total % num_blocks == 0
            data_total = total - ec_total
            # shorter blocks come first, the long ones hold one extra data codeword
            short_len, long_count = divmod(data_total, num_blocks)
            groups = [[num_blocks - long_count, short_len]]
            if long_count:
                groups.append([long_count, short_len + 1])
            blocks[version, level] = CodewordCounts(groups, ec_total // num_blocks)
    return blocks


CODEWORD_BLOCKS = _build_codeword_blocks()


def codeword_counts(version, level):
    _check_version(version)
    return CODEWORD_BLOCKS[version, level]


def data_bit_capacity(version, level):
    return codeword_counts(version, level).max_data_bits


def character_capacity(version, level, mode):
    """Largest input length (digits, characters or bytes) that fits ``version``
    at ``level`` when encoded as a single segment of ``mode``.
    """
    available = data_bit_capacity(version, level) - 4 - char_count_bits(version, mode)
    if mode is Mode.NUMERIC:
        groups, rest = divmod(available, 10)
        return groups * 3 + (2 if rest >= 7 else 1 if rest >= 4 else 0)
    if mode is Mode.ALPHANUMERIC:
        pairs, rest = divmod(available, 11)
        return pairs * 2 + (1 if rest >= 6 else 0)
    if mode is Mode.BYTE:
        return available // 8
    return available // 13
