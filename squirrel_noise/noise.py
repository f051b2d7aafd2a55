# squirrel_noise/noise.py

"""
================================================================================
RAW NOISE FUNCTIONS
================================================================================
Random-access bit-noise based on Squirrel Eiserloh's SquirrelNoise5.

The hash returns 32 reasonably-well-scrambled bits for a given (signed)
integer position and seed. It behaves like looking up a value in an infinitely
large table of previously rolled random numbers, so it is well suited to
out-of-order procedural generation: a mountain village is the same whether it
was generated first or last.

The 2D, 3D and 4D variants fold their coordinates down to a single index with
prime-weighted sums and then proceed as in 1D.

Data Contract:
---------------
- Inputs:
    - Integer coordinates (1 to 4 axes), any magnitude or sign.
    - seed: Integer seed. Negative seeds are folded to their absolute value.
- Outputs:
    - Raw functions: an int in [0, 0xFFFFFFFF].
    - ZeroToOne functions: a float in [0, 1].
    - NegOneToOne functions: a float in [-1, 1].
- Side Effects: None.
- Invariants: Identical inputs always produce the identical output.
================================================================================
"""

from . import config as DEFAULTS
from .overflow import sanitize_seed, wrap_int32, wrap_uint32


def mix(position: int, seed: int = 0) -> int:
    """
    SquirrelNoise5: hashes an integer position and seed into 32 bits.

    Every input bit affects every output bit. The worst case is the influence
    of input bit #30 on output bit #0 (49.99%, vs. 50% ideal).
    """
    seed = sanitize_seed(seed)

    bits = wrap_uint32(position)
    bits = wrap_uint32(bits * DEFAULTS.SQ5_BIT_NOISE1)
    bits = wrap_uint32(bits + seed)
    bits ^= bits >> DEFAULTS.SQ5_SHIFT1
    bits = wrap_uint32(bits + DEFAULTS.SQ5_BIT_NOISE2)
    bits ^= bits >> DEFAULTS.SQ5_SHIFT2
    bits = wrap_uint32(bits * DEFAULTS.SQ5_BIT_NOISE3)
    bits ^= bits >> DEFAULTS.SQ5_SHIFT3
    bits = wrap_uint32(bits + DEFAULTS.SQ5_BIT_NOISE4)
    bits ^= bits >> DEFAULTS.SQ5_SHIFT4
    bits = wrap_uint32(bits * DEFAULTS.SQ5_BIT_NOISE5)
    bits ^= bits >> DEFAULTS.SQ5_SHIFT5
    return bits


_AXIS_PRIMES = (DEFAULTS.PRIME_Y, DEFAULTS.PRIME_Z, DEFAULTS.PRIME_T)


def fold(x: int, *higher_axes: int) -> int:
    """
    Reduces a 2D/3D/4D coordinate to a single position for mix().

    Each higher axis is multiplied by its own prime and wrapped to 32 bits
    before being added to x. The sum itself is left unwrapped; mix() only
    looks at its low 32 bits.
    """
    if not 1 <= len(higher_axes) <= len(_AXIS_PRIMES):
        raise ValueError(
            f"fold() takes 2 to 4 coordinates, got {1 + len(higher_axes)}"
        )
    folded = int(x)
    for prime, axis in zip(_AXIS_PRIMES, higher_axes):
        folded += wrap_uint32(prime * int(axis))
    return folded


# --- Range Mapping ---
def to_zero_to_one(noise: int) -> float:
    """Maps a raw noise value onto [0, 1]."""
    return int(noise) / DEFAULTS.INT_32_UNSIGNED_MAX


def to_neg_one_to_one(noise: int) -> float:
    """
    Maps a raw noise value onto [-1, 1].

    The numerator (noise - 0xFFFFFFFF) is taken with signed 32-bit wraparound
    and divided by the signed maximum. The one value landing just below -1
    (-2**31 / (2**31 - 1)) is clamped.
    """
    shifted = wrap_int32(int(noise) - DEFAULTS.INT_32_UNSIGNED_MAX)
    return max(-1.0, shifted / DEFAULTS.INT_32_SIGNED_MAX)


# --- Raw Noise ---
def noise_raw_1d(index: int, seed: int = 0) -> int:
    return mix(index, seed)


def noise_raw_2d(x: int, y: int, seed: int = 0) -> int:
    return mix(fold(x, y), seed)


def noise_raw_3d(x: int, y: int, z: int, seed: int = 0) -> int:
    return mix(fold(x, y, z), seed)


def noise_raw_4d(x: int, y: int, z: int, t: int, seed: int = 0) -> int:
    return mix(fold(x, y, z, t), seed)


# --- Same functions, mapped to floats in [0, 1] ---
def noise_zero_to_one_1d(index: int, seed: int = 0) -> float:
    return to_zero_to_one(noise_raw_1d(index, seed))


def noise_zero_to_one_2d(x: int, y: int, seed: int = 0) -> float:
    return to_zero_to_one(noise_raw_2d(x, y, seed))


def noise_zero_to_one_3d(x: int, y: int, z: int, seed: int = 0) -> float:
    return to_zero_to_one(noise_raw_3d(x, y, z, seed))


def noise_zero_to_one_4d(x: int, y: int, z: int, t: int, seed: int = 0) -> float:
    return to_zero_to_one(noise_raw_4d(x, y, z, t, seed))


# --- Same functions, mapped to floats in [-1, 1] ---
def noise_neg_one_to_one_1d(index: int, seed: int = 0) -> float:
    return to_neg_one_to_one(noise_raw_1d(index, seed))


def noise_neg_one_to_one_2d(x: int, y: int, seed: int = 0) -> float:
    return to_neg_one_to_one(noise_raw_2d(x, y, seed))


def noise_neg_one_to_one_3d(x: int, y: int, z: int, seed: int = 0) -> float:
    return to_neg_one_to_one(noise_raw_3d(x, y, z, seed))


def noise_neg_one_to_one_4d(x: int, y: int, z: int, t: int, seed: int = 0) -> float:
    return to_neg_one_to_one(noise_raw_4d(x, y, z, t, seed))
