# squirrel_noise/__init__.py

# The public API of the package: the scalar noise functions and the
# fixed-width helpers they are built on. Array sampling lives in
# squirrel_noise.grid, the tools in squirrel_noise.baker / .fidelity.

from .overflow import sanitize_seed, wrap_int32, wrap_uint32
from .noise import (
    fold,
    mix,
    noise_neg_one_to_one_1d,
    noise_neg_one_to_one_2d,
    noise_neg_one_to_one_3d,
    noise_neg_one_to_one_4d,
    noise_raw_1d,
    noise_raw_2d,
    noise_raw_3d,
    noise_raw_4d,
    noise_zero_to_one_1d,
    noise_zero_to_one_2d,
    noise_zero_to_one_3d,
    noise_zero_to_one_4d,
    to_neg_one_to_one,
    to_zero_to_one,
)

__all__ = [
    "sanitize_seed", "wrap_int32", "wrap_uint32",
    "mix", "fold", "to_zero_to_one", "to_neg_one_to_one",
    "noise_raw_1d", "noise_raw_2d", "noise_raw_3d", "noise_raw_4d",
    "noise_zero_to_one_1d", "noise_zero_to_one_2d", "noise_zero_to_one_3d", "noise_zero_to_one_4d",
    "noise_neg_one_to_one_1d", "noise_neg_one_to_one_2d", "noise_neg_one_to_one_3d", "noise_neg_one_to_one_4d",
]
