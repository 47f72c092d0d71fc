import numpy
import pytest

from qr_code_gen.masks import QrMask, bch_code, format_bits, version_bits
from qr_code_gen.matrix import ModuleArray
from qr_code_gen.tables import ErrorCorrection as EC

# version information for versions 7-40
VERSION_STRINGS = ["000111110010010100",
                   "001000010110111100",
                   "001001101010011001",
                   "001010010011010011",
                   "001011101111110110",
                   "001100011101100010",
                   "001101100001000111",
                   "001110011000001101",
                   "001111100100101000",
                   "010000101101111000",
                   "010001010001011101",
                   "010010101000010111",
                   "010011010100110010",
                   "010100100110100110",
                   "010101011010000011",
                   "010110100011001001",
                   "010111011111101100",
                   "011000111011000100",
                   "011001000111100001",
                   "011010111110101011",
                   "011011000010001110",
                   "011100110000011010",
                   "011101001100111111",
                   "011110110101110101",
                   "011111001001010000",
                   "100000100111010101",
                   "100001011011110000",
                   "100010100010111010",
                   "100011011110011111",
                   "100100101100001011",
                   "100101010000101110",
                   "100110101001100100",
                   "100111010101000001",
                   "101000110001101001"]


def test_version_bits():
    assert [version_bits(version) for version in range(7, 41)] == VERSION_STRINGS


@pytest.mark.parametrize("level,mask_num,expected", [
    (EC.M, 0, "101010000010010"),
    (EC.L, 0, "111011111000100"),
    (EC.L, 4, "110011000101111"),
    (EC.H, 1, "001001110111110"),
    (EC.H, 7, "000100000111011"),
])
def test_format_bits(level, mask_num, expected):
    assert format_bits(level, mask_num) == expected


def test_bch_remainder_divides():
    code = bch_code(0b10101, 0b10100110111)
    assert code >> 10 == 0b10101
    assert bch_code(0, 0b10100110111) == 0


def test_mask_patterns():
    qr_masks = QrMask(21, EC.M)
    assert qr_masks.pattern(0)[0, 0] and not qr_masks.pattern(0)[0, 1]
    assert qr_masks.pattern(1)[0, 5] and not qr_masks.pattern(1)[1, 5]
    assert qr_masks.pattern(2)[7, 3] and not qr_masks.pattern(2)[7, 4]
    assert qr_masks.pattern(4)[1, 2] and not qr_masks.pattern(4)[2, 0]
    for mask_num in range(8):
        pattern = qr_masks.pattern(mask_num)
        assert pattern.shape == (21, 21)
        # every pattern inverts the top-left module
        assert pattern[0, 0]


def test_condition_1_runs():
    qr_masks = QrMask(5, EC.M)
    assert qr_masks.eval_condition_1(numpy.zeros((5, 5), dtype=numpy.uint8)) == 30
    checker = numpy.indices((5, 5)).sum(axis=0) % 2
    assert qr_masks.eval_condition_1(checker.astype(numpy.uint8)) == 0
    line = numpy.array([[1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1, 1]], dtype=numpy.uint8)
    # runs of 7 and 5 in the row, the 13 single-module columns are free
    assert qr_masks.eval_condition_1(line) == 5 + 3


def test_condition_2_blocks():
    qr_masks = QrMask(5, EC.M)
    assert qr_masks.eval_condition_2(numpy.zeros((5, 5), dtype=numpy.uint8)) == 16 * 3
    modules = numpy.zeros((3, 3), dtype=numpy.uint8)
    modules[1, 1] = 1
    assert qr_masks.eval_condition_2(modules) == 0


def test_condition_3_finder_like():
    qr_masks = QrMask(11, EC.M)
    modules = numpy.zeros((11, 11), dtype=numpy.uint8)
    modules[3] = [1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0]
    assert qr_masks.eval_condition_3(modules) == 40
    assert qr_masks.eval_condition_3(modules.T.copy()) == 40
    modules[3] = [0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1]
    assert qr_masks.eval_condition_3(modules) == 40


def test_condition_4_balance():
    qr_masks = QrMask(10, EC.M)
    modules = numpy.zeros((10, 10), dtype=numpy.uint8)
    assert qr_masks.eval_condition_4(modules) == 100
    modules[:5] = 1
    assert qr_masks.eval_condition_4(modules) == 0
    modules[5, :4] = 1  # 54%
    assert qr_masks.eval_condition_4(modules) == 0
    modules[5, 4:6] = 1  # 56%
    assert qr_masks.eval_condition_4(modules) == 10


def _premask(version, level, bits_seed=7):
    module_arr = ModuleArray(version)
    rng = numpy.random.default_rng(bits_seed)
    bits = "".join(str(b) for b in rng.integers(0, 2, module_arr.data_capacity()))
    module_arr.place_data(bits)
    return module_arr


@pytest.mark.parametrize("version,level", [(1, EC.L), (3, EC.H), (8, EC.Q)])
def test_best_mask_is_minimum(version, level):
    module_arr = _premask(version, level)
    qr_masks = QrMask(module_arr.modules_per_edge, level)
    scores = qr_masks.score_masks(module_arr.copy())
    mask_num, penalty = qr_masks.apply_best_mask(module_arr)
    assert penalty == min(scores)
    assert mask_num == scores.index(min(scores))
    assert module_arr.mask == mask_num
    # the finished matrix scores exactly what the selection recorded
    assert qr_masks.calc_mask_score(module_arr.modules) == penalty


def test_forced_mask():
    module_arr = _premask(2, EC.M)
    qr_masks = QrMask(module_arr.modules_per_edge, EC.M)
    scores = qr_masks.score_masks(module_arr.copy())
    assert qr_masks.apply_best_mask(module_arr, 5) == (5, scores[5])


def test_masks_leave_function_modules_alone():
    module_arr = _premask(7, EC.M)
    qr_masks = QrMask(module_arr.modules_per_edge, EC.M)
    data = module_arr.data_mask()
    for mask_num in range(8):
        masked = qr_masks.apply_mask(module_arr, mask_num)
        changed = masked != module_arr.modules
        assert not numpy.any(changed & ~data & (module_arr.regions == 1))
