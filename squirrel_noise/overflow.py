# squirrel_noise/overflow.py

"""
================================================================================
FIXED-WIDTH ARITHMETIC EMULATION
================================================================================
Python integers never overflow, so the 32-bit wraparound the noise algorithm
relies on has to be applied explicitly. These helpers are the only places
where that truncation happens.

Data Contract:
---------------
- Inputs: Any Python or NumPy integer (seed may also be None).
- Outputs: An int reduced into the 32-bit unsigned or signed range.
- Side Effects: None.
================================================================================
"""

from . import config as DEFAULTS


def sanitize_seed(seed) -> int:
    """Folds any seed into the unsigned 32-bit domain. None counts as 0."""
    return abs(int(seed or 0)) & DEFAULTS.INT_32_UNSIGNED_MAX


def wrap_uint32(number: int) -> int:
    """Truncates to the low 32 bits, as an unsigned 32-bit register would."""
    return int(number) & DEFAULTS.INT_32_UNSIGNED_MAX


def wrap_int32(number: int) -> int:
    """
    Reinterprets the low 32 bits of a number as a two's-complement signed
    32-bit value, in [-2**31, 2**31 - 1].
    NumPy integer scalars are converted to Python ints first.
    """
    bits = int(number) & DEFAULTS.INT_32_UNSIGNED_MAX
    if bits > DEFAULTS.INT_32_SIGNED_MAX:
        return bits - DEFAULTS.UINT32_MODULUS
    return bits
