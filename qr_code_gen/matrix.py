import copy
import enum

import numpy

from . import tables


class Region(enum.IntEnum):
    UNSET = 0
    FUNCTION = 1
    RESERVED = 2
    DATA = 3


class BuildState(enum.IntEnum):
    EMPTY = 0
    FUNCTION_PATTERNS_PLACED = 1
    RESERVED_AREAS_MARKED = 2
    DATA_PLACED = 3
    MASK_SELECTED = 4
    FORMAT_INFO_WRITTEN = 5
    FINAL = 6


FINDER_PATTERN = numpy.array([[0, 0, 0, 0, 0, 0, 0, 0, 0],
                              [0, 1, 1, 1, 1, 1, 1, 1, 0],
                              [0, 1, 0, 0, 0, 0, 0, 1, 0],
                              [0, 1, 0, 1, 1, 1, 0, 1, 0],
                              [0, 1, 0, 1, 1, 1, 0, 1, 0],
                              [0, 1, 0, 1, 1, 1, 0, 1, 0],
                              [0, 1, 0, 0, 0, 0, 0, 1, 0],
                              [0, 1, 1, 1, 1, 1, 1, 1, 0],
                              [0, 0, 0, 0, 0, 0, 0, 0, 0]], dtype=numpy.uint8)

ALIGNMENT_PATTERN = numpy.array([[1, 1, 1, 1, 1],
                                 [1, 0, 0, 0, 1],
                                 [1, 0, 1, 0, 1],
                                 [1, 0, 0, 0, 1],
                                 [1, 1, 1, 1, 1]], dtype=numpy.uint8)


def format_positions(modules_per_edge):
    """(x, y) of the two format information copies, most significant bit first."""
    size = modules_per_edge
    # right of the bottom-left finder pattern, then right of the top-left one
    first = [(8, y) for y in range(size - 1, size - 8, -1)]
    first += [(8, y) for y in (8, 7, 5, 4, 3, 2, 1, 0)]
    # under the top left finder pattern, then under the top right one
    second = [(x, 8) for x in range(6)] + [(7, 8)]
    second += [(x, 8) for x in range(size - 8, size)]
    return first, second


def version_positions(modules_per_edge):
    """(x, y) of the two version information blocks, most significant bit first."""
    size = modules_per_edge
    # left of the top right finder pattern
    top_right = [(size - 11 + i % 3, i // 3) for i in reversed(range(18))]
    # above the bottom left finder pattern
    bottom_left = [(i // 3, size - 11 + i % 3) for i in reversed(range(18))]
    return top_right, bottom_left


def write_bits(modules, positions, bits):
    for (x, y), bit in zip(positions, bits):
        modules[y, x] = int(bit)


class ModuleArray:
    """One symbol under construction.

    ``modules`` holds the module values (1 = dark) and ``regions`` tags every
    module with a ``Region``; both are indexed ``[y, x]`` (row, column) while
    the methods below take ``x, y`` like the drawing code they came from.
    """

    def __init__(self, version_num):
        self.version_num = version_num
        self.modules_per_edge = tables.modules_per_edge(version_num)
        self.modules = numpy.zeros((self.modules_per_edge, self.modules_per_edge), dtype=numpy.uint8)
        self.regions = numpy.full_like(self.modules, Region.UNSET)
        self.state = BuildState.EMPTY
        self.mask = None

        self.add_finder_patterns()
        if self.version_num > 1:
            self.add_alignment_patterns()
        self.add_timing_patterns()
        self.add_dark_module()
        self._advance(BuildState.EMPTY, BuildState.FUNCTION_PATTERNS_PLACED)

        self.protect_format_bits()
        self._advance(BuildState.FUNCTION_PATTERNS_PLACED, BuildState.RESERVED_AREAS_MARKED)

    def _advance(self, expected, new_state):
        assert self.state == expected, f"cannot go from {self.state.name} to {new_state.name}"
        self.state = new_state

    def copy(self):
        other = copy.copy(self)
        other.modules = self.modules.copy()
        other.regions = self.regions.copy()
        return other

    def get_module(self, x, y):
        return int(self.modules[y, x])

    def is_protected(self, x, y):
        return self.regions[y, x] in (Region.FUNCTION, Region.RESERVED)

    def update_module(self, x, y, value, force_update=False):
        # if we are not allowed to update this module, return error
        if self.is_protected(x, y) and not force_update:
            return 1
        self.modules[y, x] = value
        return 0

    def set_function_module(self, x, y, value):
        if 0 <= x < self.modules_per_edge and 0 <= y < self.modules_per_edge:
            self.modules[y, x] = value
            self.regions[y, x] = Region.FUNCTION

    def add_finder_patterns(self):
        # the 9x9 pattern includes the light separator, clipped at the symbol edge
        origins = [(0, 0), (self.modules_per_edge - 7, 0), (0, self.modules_per_edge - 7)]
        for origin_x, origin_y in origins:
            for y, row in enumerate(FINDER_PATTERN):
                for x, value in enumerate(row):
                    self.set_function_module(origin_x + x - 1, origin_y + y - 1, value)

    def add_alignment_patterns(self):
        locations = tables.ALIGNMENT_PATTERN_LOCS[self.version_num - 1]
        for center_x in locations:
            for center_y in locations:
                # the three corners with a finder pattern get no alignment pattern
                if self.regions[center_y, center_x] != Region.UNSET:
                    continue
                for y_shift, row in enumerate(ALIGNMENT_PATTERN):
                    for x_shift, value in enumerate(row):
                        self.set_function_module(center_x + x_shift - 2, center_y + y_shift - 2, value)

    def add_timing_patterns(self):
        for i in range(8, self.modules_per_edge - 8):
            value = 1 if i % 2 == 0 else 0
            # timing pattern between top left and top right finder patterns
            if self.regions[6, i] == Region.UNSET:
                self.set_function_module(i, 6, value)
            # timing pattern between top left and bottom left finder patterns
            if self.regions[i, 6] == Region.UNSET:
                self.set_function_module(6, i, value)

    # Dark module: one module that is ALWAYS dark in ALL QR codes
    def add_dark_module(self):
        self.set_function_module(8, (4 * self.version_num) + 9, 1)

    def protect_format_bits(self):
        reserved = []
        for positions in format_positions(self.modules_per_edge):
            reserved += positions
        # if version is 7 or higher, we need to add a redundant indication of the version number
        if self.version_num >= 7:
            for positions in version_positions(self.modules_per_edge):
                reserved += positions
        for x, y in reserved:
            if self.regions[y, x] == Region.UNSET:
                self.regions[y, x] = Region.RESERVED

    def data_capacity(self):
        return int(numpy.count_nonzero(self.regions == Region.UNSET))

    def place_data(self, content_bits):
        """Fill every unreserved module with ``content_bits`` in the zig-zag order.

        Starts bottom-right, walks two-column strips alternately up and down,
        skips the vertical timing column. The bit string must exactly cover the
        free modules (codewords followed by the version's remainder bits).
        """
        assert len(content_bits) == self.data_capacity(), "content does not fill the symbol"
        self._advance(BuildState.RESERVED_AREAS_MARKED, BuildState.DATA_PLACED)
        size = self.modules_per_edge
        bit_index = 0
        upward = True
        x = size - 1
        while x > 0:
            if x == 6:
                x -= 1
            rows = range(size - 1, -1, -1) if upward else range(size)
            for y in rows:
                for column in (x, x - 1):
                    if self.regions[y, column] == Region.UNSET:
                        self.modules[y, column] = int(content_bits[bit_index])
                        self.regions[y, column] = Region.DATA
                        bit_index += 1
            upward = not upward
            x -= 2

        assert bit_index == len(content_bits)
        assert not numpy.any(self.regions == Region.UNSET)

    def data_mask(self):
        return self.regions == Region.DATA

    def select_mask(self, mask_num, pattern):
        self._advance(BuildState.DATA_PLACED, BuildState.MASK_SELECTED)
        # XOR the chosen mask pattern onto the data modules only
        self.modules ^= (pattern & self.data_mask()).astype(numpy.uint8)
        self.mask = mask_num

    def write_format_info(self, format_bits):
        self._advance(BuildState.MASK_SELECTED, BuildState.FORMAT_INFO_WRITTEN)
        for positions in format_positions(self.modules_per_edge):
            write_bits(self.modules, positions, format_bits)

    def write_version_info(self, version_bits):
        self._advance(BuildState.FORMAT_INFO_WRITTEN, BuildState.FINAL)
        if self.version_num >= 7:
            for positions in version_positions(self.modules_per_edge):
                write_bits(self.modules, positions, version_bits)

    def freeze(self):
        assert self.state == BuildState.FINAL
        frozen = self.modules.astype(bool)
        frozen.flags.writeable = False
        return frozen
