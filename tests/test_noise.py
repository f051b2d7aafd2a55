# tests/test_noise.py
import numpy as np
import pytest

import squirrel_noise as sn
from squirrel_noise import config as DEFAULTS
from squirrel_noise.noise import fold, mix, to_neg_one_to_one, to_zero_to_one

SAMPLE_POINTS = [-(2**31), -12345, -1, 0, 1, 7, 12345, 2**31 - 1]
SAMPLE_SEEDS = [-(2**31), -42, 0, 1, 42, 1337, 2**31 - 1]


# --- BitMixer ---
@pytest.mark.parametrize("position, seed, expected", [
    (0, 0, 377036288),
    (1, 0, 3365260061),
    (-1, 0, 4210126164),
    (12345, 6789, 491791707),
    (0, 1, 603375697),
    (0, 2, 3481588828),
    (0, 3, 154095263),
])
def test_mix_reference_vectors(position, seed, expected):
    assert mix(position, seed) == expected


def test_mix_default_seed_is_zero():
    assert mix(0) == mix(0, 0) == mix(0, None)


def test_mix_negative_seed_matches_absolute_value():
    assert mix(12345, -6789) == mix(12345, 6789)


def test_mix_only_low_32_bits_of_position_matter():
    assert mix(2**32 + 5, 9) == mix(5, 9)
    assert mix(-1, 9) == mix(0xFFFFFFFF, 9)


def test_mix_is_deterministic():
    for position in SAMPLE_POINTS:
        for seed in SAMPLE_SEEDS:
            first = mix(position, seed)
            assert all(mix(position, seed) == first for _ in range(3))
            assert 0 <= first <= DEFAULTS.INT_32_UNSIGNED_MAX


def test_mix_is_seed_sensitive():
    values = {mix(1000, seed) for seed in range(100)}
    assert len(values) >= 99


def test_mix_is_order_independent():
    forward = [mix(p, 77) for p in range(-50, 50)]
    backward = [mix(p, 77) for p in reversed(range(-50, 50))]
    assert forward == backward[::-1]


# --- DimensionFolder ---
def test_fold_formula():
    assert fold(3, 7) == 3 + DEFAULTS.PRIME_Y * 7
    assert fold(3, 7) == 1389439222


def test_fold_wraps_each_prime_product():
    assert fold(0, 2**31 - 1) == 1948992331
    assert fold(0, 2**31) == 0x80000000
    assert fold(0, -1) == 2**32 - DEFAULTS.PRIME_Y


def test_fold_does_not_rewrap_the_sum():
    assert fold(2**31 - 1, 2**31 - 1) == 4096475978
    assert fold(-3, -7, -11, -13) == 11418845680


def test_fold_rejects_bad_arity():
    with pytest.raises(ValueError):
        fold(1)
    with pytest.raises(ValueError):
        fold(1, 2, 3, 4, 5)


# --- Per-dimension entry points ---
def test_1d_is_mix_directly():
    for position in SAMPLE_POINTS:
        for seed in SAMPLE_SEEDS:
            assert sn.noise_raw_1d(position, seed) == mix(position, seed)


def test_2d_with_zero_y_equals_1d():
    for seed in SAMPLE_SEEDS:
        assert sn.noise_raw_2d(5, 0, seed) == sn.noise_raw_1d(5, seed)
    assert sn.noise_raw_2d(5, 0, 42) == 3132980945


def test_higher_dimensions_with_zero_axes_equal_1d():
    assert sn.noise_raw_3d(5, 0, 0, 42) == sn.noise_raw_1d(5, 42)
    assert sn.noise_raw_4d(5, 0, 0, 0, 42) == sn.noise_raw_1d(5, 42)


def test_2d_neighbouring_rows_differ():
    differing = sum(sn.noise_raw_2d(5, 1, seed) != sn.noise_raw_2d(5, 2, seed) for seed in range(200))
    assert differing >= 198


@pytest.mark.parametrize("func, args, expected", [
    (sn.noise_raw_2d, (3, 7, 42), 843213483),
    (sn.noise_raw_3d, (3, 7, 11, 42), 1474015690),
    (sn.noise_raw_4d, (3, 7, 11, 13, 42), 1857810117),
    (sn.noise_raw_4d, (-3, -7, -11, -13, -42), 3240135950),
    (sn.noise_raw_2d, (2**31 - 1, 2**31 - 1, 1), 2568686874),
])
def test_multidimensional_reference_vectors(func, args, expected):
    assert func(*args) == expected


def test_axes_are_not_interchangeable():
    assert sn.noise_raw_3d(1, 2, 3, 0) != sn.noise_raw_3d(1, 3, 2, 0)
    assert sn.noise_raw_4d(1, 2, 3, 4, 0) != sn.noise_raw_4d(1, 2, 4, 3, 0)


# --- RangeMapper ---
def test_to_zero_to_one_endpoints():
    assert to_zero_to_one(0) == 0.0
    assert to_zero_to_one(DEFAULTS.INT_32_UNSIGNED_MAX) == 1.0


def test_to_neg_one_to_one_endpoints():
    assert to_neg_one_to_one(DEFAULTS.INT_32_UNSIGNED_MAX) == 0.0
    assert to_neg_one_to_one(0x7FFFFFFE) == 1.0
    # -2**31 / (2**31 - 1) is clamped
    assert to_neg_one_to_one(0x7FFFFFFF) == -1.0
    assert to_neg_one_to_one(0) == pytest.approx(1 / DEFAULTS.INT_32_SIGNED_MAX)


def test_to_neg_one_to_one_uses_signed_wrapped_numerator():
    noise = 377036288
    expected = sn.wrap_int32(noise - DEFAULTS.INT_32_UNSIGNED_MAX) / DEFAULTS.INT_32_SIGNED_MAX
    assert to_neg_one_to_one(noise) == expected


@pytest.mark.parametrize("raw, zero_to_one, neg_one_to_one, nargs", [
    (sn.noise_raw_1d, sn.noise_zero_to_one_1d, sn.noise_neg_one_to_one_1d, 1),
    (sn.noise_raw_2d, sn.noise_zero_to_one_2d, sn.noise_neg_one_to_one_2d, 2),
    (sn.noise_raw_3d, sn.noise_zero_to_one_3d, sn.noise_neg_one_to_one_3d, 3),
    (sn.noise_raw_4d, sn.noise_zero_to_one_4d, sn.noise_neg_one_to_one_4d, 4),
])
def test_float_forms_are_range_mapped_raw(raw, zero_to_one, neg_one_to_one, nargs):
    for i, position in enumerate(SAMPLE_POINTS):
        coords = [position + k * 31 for k in range(nargs)]
        seed = SAMPLE_SEEDS[i % len(SAMPLE_SEEDS)]
        value = raw(*coords, seed)
        assert zero_to_one(*coords, seed) == to_zero_to_one(value)
        assert neg_one_to_one(*coords, seed) == to_neg_one_to_one(value)
        assert 0.0 <= zero_to_one(*coords, seed) <= 1.0
        assert -1.0 <= neg_one_to_one(*coords, seed) <= 1.0


def test_float_forms_cover_their_range():
    zero_to_one = [sn.noise_zero_to_one_2d(x, y, 9) for x in range(40) for y in range(40)]
    neg_one_to_one = [sn.noise_neg_one_to_one_2d(x, y, 9) for x in range(40) for y in range(40)]
    assert min(zero_to_one) < 0.05 and max(zero_to_one) > 0.95
    assert min(neg_one_to_one) < -0.9 and max(neg_one_to_one) > 0.9
    assert all(0.0 <= v <= 1.0 for v in zero_to_one)
    assert all(-1.0 <= v <= 1.0 for v in neg_one_to_one)


# --- NumPy scalar inputs ---
def test_numpy_int32_coordinates_match_python_ints():
    assert sn.noise_raw_1d(np.int32(-1), 0) == sn.noise_raw_1d(-1, 0) == 4210126164
    assert sn.noise_raw_2d(np.int32(-3), np.int32(-7), np.int32(-42)) == sn.noise_raw_2d(-3, -7, -42)
    assert sn.noise_raw_4d(*(np.int32(v) for v in (-3, -7, -11, -13)), -42) == 3240135950
    assert sn.noise_raw_2d(np.int32(2**31 - 1), np.int32(2**31 - 1), 1) == 2568686874


def test_numpy_seed_matches_python_int():
    assert mix(12345, np.int32(-6789)) == 491791707
    assert sn.sanitize_seed(np.int32(-(2**31))) == 2**31


def test_numpy_unsigned_noise_values_map_like_python_ints():
    from squirrel_noise import grid

    raw = grid.noise_raw_array(np.arange(-64, 64), seed=3)
    for value in raw:
        assert to_neg_one_to_one(value) == to_neg_one_to_one(int(value))
        assert to_zero_to_one(value) == to_zero_to_one(int(value))
    assert to_neg_one_to_one(np.uint32(0x7FFFFFFF)) == -1.0
    assert to_neg_one_to_one(np.uint32(0xFFFFFFFF)) == 0.0
    assert sn.to_neg_one_to_one(sn.mix(np.uint32(5), 3)) == sn.to_neg_one_to_one(sn.mix(5, 3))


def test_wrap_helpers_accept_numpy_scalars():
    assert sn.wrap_uint32(np.int32(-1)) == 0xFFFFFFFF
    assert sn.wrap_int32(np.uint32(0xFFFFFFFF)) == -1
    assert sn.wrap_int32(np.uint32(0x80000000)) == -(2**31)
