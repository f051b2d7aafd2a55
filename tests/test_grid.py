# tests/test_grid.py
import numpy as np
import numpy.testing as npt
import pytest

import squirrel_noise as sn
from squirrel_noise import grid

COORDS = np.array([-(2**31), -12345, -1, 0, 1, 5, 12345, 2**31 - 1], dtype=np.int64)


def test_raw_array_1d_matches_scalar():
    result = grid.noise_raw_array(COORDS, seed=6789)
    assert result.dtype == np.uint32
    assert result.shape == COORDS.shape
    assert result.tolist() == [sn.noise_raw_1d(int(x), 6789) for x in COORDS]


def test_raw_array_reference_vectors():
    result = grid.noise_raw_array([0, 1, -1], seed=0)
    assert result.tolist() == [377036288, 3365260061, 4210126164]
    assert grid.noise_raw_array([12345], seed=-6789).tolist() == [491791707]


@pytest.mark.parametrize("dims", [2, 3, 4])
def test_raw_array_multidimensional_matches_scalar(dims):
    scalar = {2: sn.noise_raw_2d, 3: sn.noise_raw_3d, 4: sn.noise_raw_4d}[dims]
    axes = [np.roll(COORDS, k) for k in range(dims)]
    result = grid.noise_raw_array(*axes, seed=-42)
    expected = [scalar(*(int(a[i]) for a in axes), -42) for i in range(len(COORDS))]
    assert result.tolist() == expected


def test_raw_array_broadcasts_scalar_axes():
    xs = np.arange(-3, 4)
    result = grid.noise_raw_array(xs, 7, 11, 13, seed=42)
    assert result.tolist() == [sn.noise_raw_4d(int(x), 7, 11, 13, 42) for x in xs]


def test_raw_array_keeps_input_shape():
    x = np.arange(12).reshape(3, 4)
    y = np.arange(4)
    result = grid.noise_raw_array(x, y, seed=1)
    assert result.shape == (3, 4)
    assert result[2, 3] == sn.noise_raw_2d(11, 3, 1)


def test_raw_array_mismatched_shapes_raise():
    with pytest.raises(ValueError):
        grid.noise_raw_array(np.arange(3), np.arange(4))


def test_float_arrays_match_scalar_exactly():
    zero_to_one = grid.noise_zero_to_one_array(COORDS, seed=3)
    neg_one_to_one = grid.noise_neg_one_to_one_array(COORDS, seed=3)
    assert zero_to_one.tolist() == [sn.noise_zero_to_one_1d(int(x), 3) for x in COORDS]
    assert neg_one_to_one.tolist() == [sn.noise_neg_one_to_one_1d(int(x), 3) for x in COORDS]


def test_array_range_mappers_edge_values():
    raw = np.array([0, 0x7FFFFFFE, 0x7FFFFFFF, 0xFFFFFFFF], dtype=np.uint32)
    npt.assert_array_equal(grid.zero_to_one_array(raw), [sn.to_zero_to_one(int(v)) for v in raw])
    npt.assert_array_equal(grid.neg_one_to_one_array(raw), [sn.to_neg_one_to_one(int(v)) for v in raw])


def test_noise_grid_layout():
    tile = grid.noise_grid(-4, 10, width=6, height=3, seed=99)
    assert tile.shape == (3, 6)
    for row in range(3):
        for col in range(6):
            assert tile[row, col] == sn.noise_raw_2d(-4 + col, 10 + row, 99)


def test_noise_grid_slices_of_higher_dimensions():
    tile3 = grid.noise_grid(0, 0, 4, 4, seed=5, z=8)
    tile4 = grid.noise_grid(0, 0, 4, 4, seed=5, z=8, t=-2)
    assert tile3[1, 2] == sn.noise_raw_3d(2, 1, 8, 5)
    assert tile4[3, 0] == sn.noise_raw_4d(0, 3, 8, -2, 5)


@pytest.mark.parametrize("mode, low, high", [
    ("zero_to_one", 0.0, 1.0),
    ("neg_one_to_one", -1.0, 1.0),
])
def test_noise_grid_float_modes_stay_in_range(mode, low, high):
    tile = grid.noise_grid(-32, -32, 64, 64, seed=1337, mode=mode)
    assert tile.dtype == np.float64
    assert tile.min() >= low
    assert tile.max() <= high


def test_noise_grid_unknown_mode():
    with pytest.raises(ValueError):
        grid.noise_grid(0, 0, 2, 2, mode="perlin")


def test_neighbouring_tiles_are_seamless():
    big = grid.noise_grid(0, 0, 8, 4, seed=2)
    left = grid.noise_grid(0, 0, 4, 4, seed=2)
    right = grid.noise_grid(4, 0, 4, 4, seed=2)
    npt.assert_array_equal(big, np.hstack([left, right]))
