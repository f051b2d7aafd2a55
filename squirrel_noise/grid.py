# squirrel_noise/grid.py

"""
================================================================================
VECTORIZED NOISE SAMPLING
================================================================================
Array versions of the raw noise functions, for filling whole tiles or chunks
of a world at once. The kernel is JIT-compiled with Numba.

Data Contract:
---------------
- Inputs:
    - x, y, z, t: Integer NumPy arrays (or anything array-like) of lattice
      coordinates within the int64 range. They are broadcast together; a
      missing axis contributes nothing to the folded position.
    - seed: Integer seed.
- Outputs:
    - Raw: a uint32 array with the broadcast shape.
    - ZeroToOne / NegOneToOne: float64 arrays with the broadcast shape.
- Side Effects: None.
- Invariants: Every element equals the scalar function from noise.py for the
  same coordinate and seed, bit for bit.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .overflow import sanitize_seed

# The kernel works on uint64 values and masks back to 32 bits after every
# step. Constants are typed uint64 so Numba never promotes to float.
_MASK = np.uint64(DEFAULTS.INT_32_UNSIGNED_MAX)
_NOISE1 = np.uint64(DEFAULTS.SQ5_BIT_NOISE1)
_NOISE2 = np.uint64(DEFAULTS.SQ5_BIT_NOISE2)
_NOISE3 = np.uint64(DEFAULTS.SQ5_BIT_NOISE3)
_NOISE4 = np.uint64(DEFAULTS.SQ5_BIT_NOISE4)
_NOISE5 = np.uint64(DEFAULTS.SQ5_BIT_NOISE5)
_SHIFT1 = np.uint64(DEFAULTS.SQ5_SHIFT1)
_SHIFT2 = np.uint64(DEFAULTS.SQ5_SHIFT2)
_SHIFT3 = np.uint64(DEFAULTS.SQ5_SHIFT3)
_SHIFT4 = np.uint64(DEFAULTS.SQ5_SHIFT4)
_SHIFT5 = np.uint64(DEFAULTS.SQ5_SHIFT5)
_PRIME_Y = np.uint64(DEFAULTS.PRIME_Y)
_PRIME_Z = np.uint64(DEFAULTS.PRIME_Z)
_PRIME_T = np.uint64(DEFAULTS.PRIME_T)

_SIGN_BIT = DEFAULTS.INT_32_SIGNED_MAX + 1


@njit
def _squirrel_noise5(bits, seed):
    "The same step sequence as noise.mix(), on uint64 registers."
    bits = (bits * _NOISE1) & _MASK
    bits = (bits + seed) & _MASK
    bits = bits ^ (bits >> _SHIFT1)
    bits = (bits + _NOISE2) & _MASK
    bits = bits ^ (bits >> _SHIFT2)
    bits = (bits * _NOISE3) & _MASK
    bits = bits ^ (bits >> _SHIFT3)
    bits = (bits + _NOISE4) & _MASK
    bits = bits ^ (bits >> _SHIFT4)
    bits = (bits * _NOISE5) & _MASK
    bits = bits ^ (bits >> _SHIFT5)
    return bits


@njit
def _noise_kernel(x, y, z, t, seed):
    """
    Folds and hashes flat uint64 coordinate arrays whose values are already
    reduced to 32-bit patterns.
    """
    n = x.shape[0]
    out = np.empty(n, dtype=np.uint32)
    for i in range(n):
        folded = (
            x[i]
            + ((y[i] * _PRIME_Y) & _MASK)
            + ((z[i] * _PRIME_Z) & _MASK)
            + ((t[i] * _PRIME_T) & _MASK)
        )
        out[i] = _squirrel_noise5(folded & _MASK, seed)
    return out


def _as_uint32_bits(coords: np.ndarray) -> np.ndarray:
    """Two's-complement low 32 bits of an integer array, as uint64."""
    bits = np.asarray(coords, dtype=np.int64) & DEFAULTS.INT_32_UNSIGNED_MAX
    return np.ascontiguousarray(bits, dtype=np.uint64).ravel()


def noise_raw_array(x, y=None, z=None, t=None, seed: int = 0) -> np.ndarray:
    """Raw 32-bit noise for every coordinate in the broadcast arrays."""
    axes = [np.asarray(a, dtype=np.int64) for a in (x, y, z, t) if a is not None]
    shape = np.broadcast_shapes(*(a.shape for a in axes))

    flat = []
    for axis in (x, y, z, t):
        if axis is None:
            flat.append(np.zeros(int(np.prod(shape)), dtype=np.uint64))
        else:
            flat.append(_as_uint32_bits(np.broadcast_to(np.asarray(axis, dtype=np.int64), shape)))

    result = _noise_kernel(flat[0], flat[1], flat[2], flat[3], np.uint64(sanitize_seed(seed)))
    return result.reshape(shape)


# --- Range Mapping ---
def zero_to_one_array(raw: np.ndarray) -> np.ndarray:
    """Maps raw noise values onto [0, 1]."""
    return np.asarray(raw, dtype=np.float64) / DEFAULTS.INT_32_UNSIGNED_MAX


def neg_one_to_one_array(raw: np.ndarray) -> np.ndarray:
    """Maps raw noise values onto [-1, 1] exactly as noise.to_neg_one_to_one()."""
    shifted = np.asarray(raw, dtype=np.int64) - DEFAULTS.INT_32_UNSIGNED_MAX
    shifted = ((shifted + _SIGN_BIT) % DEFAULTS.UINT32_MODULUS) - _SIGN_BIT
    return np.maximum(shifted / DEFAULTS.INT_32_SIGNED_MAX, -1.0)


def noise_zero_to_one_array(x, y=None, z=None, t=None, seed: int = 0) -> np.ndarray:
    return zero_to_one_array(noise_raw_array(x, y, z, t, seed=seed))


def noise_neg_one_to_one_array(x, y=None, z=None, t=None, seed: int = 0) -> np.ndarray:
    return neg_one_to_one_array(noise_raw_array(x, y, z, t, seed=seed))


_MODE_FUNCTIONS = {
    'raw': noise_raw_array,
    'zero_to_one': noise_zero_to_one_array,
    'neg_one_to_one': noise_neg_one_to_one_array,
}


def sample(mode: str, x, y=None, z=None, t=None, seed: int = 0) -> np.ndarray:
    """Dispatches to the array function for a noise mode by name."""
    if mode not in _MODE_FUNCTIONS:
        raise ValueError(f"Unknown noise mode '{mode}'. Expected one of {DEFAULTS.NOISE_MODES}.")
    return _MODE_FUNCTIONS[mode](x, y, z, t, seed=seed)


def noise_grid(x_start: int, y_start: int, width: int, height: int, seed: int = 0,
               z=None, t=None, mode: str = 'raw') -> np.ndarray:
    """
    Samples a (height, width) tile of the integer lattice starting at
    (x_start, y_start). Passing z and/or t takes a 2D slice of 3D/4D noise.
    """
    xs = np.arange(x_start, x_start + width, dtype=np.int64)
    ys = np.arange(y_start, y_start + height, dtype=np.int64)
    x_grid, y_grid = np.meshgrid(xs, ys)
    return sample(mode, x_grid, y_grid, z, t, seed=seed)
