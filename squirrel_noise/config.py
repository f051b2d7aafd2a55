# squirrel_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the fixed constants of the noise algorithm and the
default, fallback settings for the baking tools.

The mixing constants, shift amounts and folding primes are part of the noise
contract: changing any of them changes every generated value.

DO NOT MODIFY THIS FILE FOR A SPECIFIC BAKE.
Instead, pass a JSON configuration file to the baker.
================================================================================
"""

# --- Fixed-Width Integer Limits ---
INT_32_UNSIGNED_MAX = 0xFFFFFFFF
INT_32_SIGNED_MAX = 0x7FFFFFFF
UINT32_MODULUS = INT_32_UNSIGNED_MAX + 1

# --- SquirrelNoise5 Bit-Mixing Constants ---
SQ5_BIT_NOISE1 = 0xD2A80A3F  # 11010010101010000000101000111111
SQ5_BIT_NOISE2 = 0xA884F197  # 10101000100001001111000110010111
SQ5_BIT_NOISE3 = 0x6C736F4B  # 01101100011100110110111101001011
SQ5_BIT_NOISE4 = 0xB79F3ABB  # 10110111100111110011101010111011
SQ5_BIT_NOISE5 = 0x1B56C4F5  # 00011011010101101100010011110101

# Right-shift amounts of the five xor-shift folds, in order.
SQ5_SHIFT1 = 9
SQ5_SHIFT2 = 11
SQ5_SHIFT3 = 13
SQ5_SHIFT4 = 15
SQ5_SHIFT5 = 17

# --- Dimensional Folding Primes ---
# Large primes with distinct, non-boring bits, one per higher axis.
PRIME_Y = 198491317
PRIME_Z = 6542989
PRIME_T = 357239

# --- Noise Baking ---
DEFAULT_SEED = 1337
DEFAULT_DIMENSIONS = 2
# 'raw' | 'zero_to_one' | 'neg_one_to_one'
DEFAULT_MODE = 'zero_to_one'
NOISE_MODES = ('raw', 'zero_to_one', 'neg_one_to_one')

# The fixed coordinate used for the z and t axes when baking 3D/4D noise.
DEFAULT_SLICE_Z = 0
DEFAULT_SLICE_T = 0

# The number of lattice samples on one side of a tile image.
TILE_RESOLUTION = 64
DEFAULT_WIDTH_TILES = 4
DEFAULT_HEIGHT_TILES = 4

# 'grayscale' | 'heat'
DEFAULT_PALETTE = 'grayscale'

DEFAULT_OUTPUT_DIR = 'baked_noise'
# 0 means "one fewer than the CPU count".
DEFAULT_NUM_WORKERS = 0
