# squirrel_noise/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the palettes and functions for converting normalized
noise values into RGB color arrays for baked preview images.

It is a pure, stateless utility; the baker and the fidelity probe both use it
so that their pixels agree exactly.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS

# --- Default Color Mappings ---
COLOR_MAP_GRAYSCALE = {
    "low": (0, 0, 0),
    "high": (255, 255, 255)
}

# Color stops at 0, 0.25, 0.5, 0.75 and 1.
COLOR_MAP_HEAT = (
    (0, 0, 100),
    (0, 0, 255),
    (255, 255, 0),
    (255, 0, 0),
    (150, 0, 0)
)

LUT_SIZE = 256


# --- Color Lookup Table (LUT) Generation ---
def create_grayscale_lut() -> np.ndarray:
    """Creates a 256-entry black-to-white LUT."""
    t = np.linspace(0.0, 1.0, LUT_SIZE)[..., np.newaxis]
    colors = (1 - t) * np.array(COLOR_MAP_GRAYSCALE["low"]) + t * np.array(COLOR_MAP_GRAYSCALE["high"])
    return np.round(colors).astype(np.uint8)


def create_heat_lut() -> np.ndarray:
    """Creates a 256-entry LUT interpolating through the heat color stops."""
    t = np.linspace(0.0, 1.0, LUT_SIZE)
    stops = np.linspace(0.0, 1.0, len(COLOR_MAP_HEAT))
    stop_colors = np.array(COLOR_MAP_HEAT, dtype=np.float64)
    channels = [np.interp(t, stops, stop_colors[:, c]) for c in range(3)]
    return np.round(np.stack(channels, axis=-1)).astype(np.uint8)


PALETTES = {
    'grayscale': create_grayscale_lut,
    'heat': create_heat_lut,
}


def create_lut(palette: str) -> np.ndarray:
    if palette not in PALETTES:
        raise ValueError(f"Unknown palette '{palette}'. Expected one of {tuple(PALETTES)}.")
    return PALETTES[palette]()


# --- Color Array Generation ---
def normalize_for_display(values: np.ndarray, mode: str) -> np.ndarray:
    """Brings noise of any mode onto [0, 1] for color lookup."""
    values = np.asarray(values, dtype=np.float64)
    if mode == 'raw':
        return values / DEFAULTS.INT_32_UNSIGNED_MAX
    if mode == 'neg_one_to_one':
        return (values + 1.0) / 2.0
    return values


def get_lut_indices(values01: np.ndarray) -> np.ndarray:
    """Quantizes [0, 1] values to LUT indices."""
    return np.round(np.clip(values01, 0.0, 1.0) * (LUT_SIZE - 1)).astype(np.uint8)


def get_noise_color_array(values01: np.ndarray, lut: np.ndarray) -> np.ndarray:
    """
    Converts normalized noise data [0, 1] of shape (H, W) into an RGB color
    array of shape (H, W, 3) using a pre-computed LUT.
    """
    return lut[get_lut_indices(values01)]
