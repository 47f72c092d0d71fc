import logging

import numpy
from numpy.lib.stride_tricks import sliding_window_view

from .matrix import format_positions, version_positions, write_bits

logger = logging.getLogger(__name__)

FORMAT_GENERATOR = 0b10100110111
FORMAT_XOR_MASK = 0b101010000010010
VERSION_GENERATOR = 0b1111100100101

# dark-light-dark-dark-dark-light-dark with 4 light modules on either side
FINDER_LIKE_PATTERNS = numpy.array([[0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1],
                                    [1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0]], dtype=numpy.uint8)


def bch_code(data, generator):
    """Append the BCH remainder of ``data`` divided by ``generator``."""
    degree = generator.bit_length() - 1
    remainder = data << degree
    # while the remainder is longer than the generator degree, XOR it with the shifted generator
    while remainder.bit_length() > degree:
        remainder ^= generator << (remainder.bit_length() - 1 - degree)
    return (data << degree) | remainder


def format_bits(err_corr_lvl, mask_num):
    """15-bit format information, most significant bit first, as a string."""
    data = (err_corr_lvl.value << 3) | mask_num
    # ISO/IEC 18004 XORs the format bits with 101010000010010
    return f'{bch_code(data, FORMAT_GENERATOR) ^ FORMAT_XOR_MASK:015b}'


def version_bits(version_num):
    return f'{bch_code(version_num, VERSION_GENERATOR):018b}'


def _run_penalty(line):
    boundaries = numpy.flatnonzero(numpy.diff(line.astype(numpy.int8))) + 1
    edges = numpy.concatenate(([0], boundaries, [len(line)]))
    runs = numpy.diff(edges)
    # 3 points for a run of 5, one more for every module after the 5th
    return int(numpy.sum(runs[runs >= 5] - 2))


class QrMask:

    def __init__(self, modules_per_edge, err_corr_lvl):
        self.modules_per_edge = modules_per_edge
        self.err_corr_lvl = err_corr_lvl
        self.row, self.column = numpy.indices((modules_per_edge, modules_per_edge))
        self.mask_funcs = [self.mask_num_0, self.mask_num_1, self.mask_num_2, self.mask_num_3,
                           self.mask_num_4, self.mask_num_5, self.mask_num_6, self.mask_num_7]

    # each mask function returns True where a data module gets inverted

    def mask_num_0(self, row, column):
        return (row + column) % 2 == 0

    def mask_num_1(self, row, column):
        return row % 2 == 0

    def mask_num_2(self, row, column):
        return column % 3 == 0

    def mask_num_3(self, row, column):
        return (row + column) % 3 == 0

    def mask_num_4(self, row, column):
        return (numpy.floor(row / 2) + numpy.floor(column / 3)) % 2 == 0

    def mask_num_5(self, row, column):
        return ((row * column) % 2) + ((row * column) % 3) == 0

    def mask_num_6(self, row, column):
        return (((row * column) % 2) + ((row * column) % 3)) % 2 == 0

    def mask_num_7(self, row, column):
        return (((row + column) % 2) + ((row * column) % 3)) % 2 == 0

    def pattern(self, mask_num):
        return self.mask_funcs[mask_num](self.row, self.column)

    def apply_mask(self, module_arr, mask_num):
        """Return a masked copy of the module values with this mask's format
        and version information written, leaving ``module_arr`` untouched.
        """
        modules = module_arr.modules ^ (self.pattern(mask_num) & module_arr.data_mask()).astype(numpy.uint8)
        bits = format_bits(self.err_corr_lvl, mask_num)
        for positions in format_positions(self.modules_per_edge):
            write_bits(modules, positions, bits)
        if module_arr.version_num >= 7:
            bits = version_bits(module_arr.version_num)
            for positions in version_positions(self.modules_per_edge):
                write_bits(modules, positions, bits)
        return modules

    def eval_condition_1(self, modules):
        # Evaluation Condition #1: 5+ same-colored modules in a row/column
        penalty = 0
        for line in modules:
            penalty += _run_penalty(line)
        for line in modules.T:
            penalty += _run_penalty(line)
        return penalty

    def eval_condition_2(self, modules):
        # Evaluation Condition #2: 2x2 squares of the same color
        top_left = modules[:-1, :-1]
        same = (top_left == modules[1:, :-1]) & (top_left == modules[:-1, 1:]) & (top_left == modules[1:, 1:])
        return 3 * int(numpy.count_nonzero(same))

    def eval_condition_3(self, modules):
        # Evaluation Condition #3: finder-like patterns in rows and columns
        penalty = 0
        for lines in (modules, modules.T):
            windows = sliding_window_view(lines, FINDER_LIKE_PATTERNS.shape[1], axis=1)
            for patt in FINDER_LIKE_PATTERNS:
                penalty += 40 * int(numpy.count_nonzero(numpy.all(windows == patt, axis=-1)))
        return penalty

    def eval_condition_4(self, modules):
        # Evaluation Condition #4: ratio of black to white modules
        dark_count = int(numpy.count_nonzero(modules))
        total_module_count = modules.size
        # 10 points for every full 5% the dark ratio is away from 50%
        return 10 * (abs(dark_count * 20 - total_module_count * 10) // total_module_count)

    def calc_mask_score(self, modules):
        penalty = self.eval_condition_1(modules)
        penalty += self.eval_condition_2(modules)
        penalty += self.eval_condition_3(modules)
        penalty += self.eval_condition_4(modules)
        return penalty

    def score_masks(self, module_arr):
        """Penalty of every mask candidate, indexed by mask number."""
        return [self.calc_mask_score(self.apply_mask(module_arr, mask_num)) for mask_num in range(8)]

    def apply_best_mask(self, module_arr, mask_num=None):
        """Mask ``module_arr`` with the lowest-penalty pattern (or ``mask_num``
        when given), write its format and version information and return
        ``(mask_num, penalty)``.
        """
        scores = self.score_masks(module_arr)
        logger.debug("mask penalties: %s", scores)
        if mask_num is None:
            # min() keeps the first, so ties go to the lowest mask number
            mask_num = min(range(8), key=scores.__getitem__)

        module_arr.select_mask(mask_num, self.pattern(mask_num))
        module_arr.write_format_info(format_bits(self.err_corr_lvl, mask_num))
        module_arr.write_version_info(version_bits(module_arr.version_num))
        logger.debug("selected mask %d with penalty %d", mask_num, scores[mask_num])
        return mask_num, scores[mask_num]
