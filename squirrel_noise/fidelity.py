# squirrel_noise/fidelity.py

"""
================================================================================
FIDELITY PROBE
================================================================================
Re-reads a baked noise package and checks that the stored pixels match what
the scalar (pure Python) noise functions produce for the same lattice points.
The baker goes through the Numba kernel, so a PASS here means both paths
agree. The reference vectors are checked as well.

Usage:
    squirrel-noise-probe --bake-dir baked_noise/seed_1337
================================================================================
"""
import argparse
import json
import logging
import os
import sys

import numpy as np
from PIL import Image

from . import color_maps
from . import noise

# Known-good outputs of mix(position, seed).
REFERENCE_VECTORS = {
    (0, 0): 377036288,
    (1, 0): 3365260061,
    (-1, 0): 4210126164,
    (12345, 6789): 491791707,
}

_SCALAR_NOISE = {
    1: {'raw': noise.noise_raw_1d, 'zero_to_one': noise.noise_zero_to_one_1d,
        'neg_one_to_one': noise.noise_neg_one_to_one_1d},
    2: {'raw': noise.noise_raw_2d, 'zero_to_one': noise.noise_zero_to_one_2d,
        'neg_one_to_one': noise.noise_neg_one_to_one_2d},
    3: {'raw': noise.noise_raw_3d, 'zero_to_one': noise.noise_zero_to_one_3d,
        'neg_one_to_one': noise.noise_neg_one_to_one_3d},
    4: {'raw': noise.noise_raw_4d, 'zero_to_one': noise.noise_zero_to_one_4d,
        'neg_one_to_one': noise.noise_neg_one_to_one_4d},
}


def sample_point(settings: dict, wx: int, wy: int):
    """Scalar noise value for one lattice point under the bake settings."""
    dims = settings['dimensions']
    coords = (wx, wy, settings['slice_z'], settings['slice_t'])[:dims]
    return _SCALAR_NOISE[dims][settings['mode']](*coords, seed=settings['seed'])


def expected_color(settings: dict, lut: np.ndarray, wx: int, wy: int) -> tuple:
    value = sample_point(settings, wx, wy)
    values01 = color_maps.normalize_for_display(np.array([value]), settings['mode'])
    return tuple(int(c) for c in color_maps.get_noise_color_array(values01, lut)[0])


def check_reference_vectors(logger: logging.Logger) -> bool:
    passed = True
    for (position, seed), expected in REFERENCE_VECTORS.items():
        actual = noise.mix(position, seed)
        result = "PASS" if actual == expected else "FAIL"
        if result == "FAIL":
            passed = False
        logger.info(f"  - mix({position}, {seed}) = {actual}, expected {expected} -> {result}")
    return passed


def probe_tile(logger, settings, lut, bake_dir, manifest, tx, ty) -> bool:
    """Runs the probe on a single tile's corners and center."""
    logger.info(f"--- Probing Tile ({tx}, {ty}) ---")

    try:
        tile_hash = manifest['tile_map'][ty][tx]
        tile_path = os.path.join(bake_dir, "tiles", f"{tile_hash}.png")
        # Palettized images must be converted back to RGB to get pixel data.
        pixels = np.array(Image.open(tile_path).convert('RGB'))
    except (IndexError, KeyError, TypeError, FileNotFoundError):
        logger.error(f"FAILURE: Could not find or load tile ({tx}, {ty}) from manifest.")
        return False

    res = manifest['tile_resolution_pixels']
    x0 = settings['origin_x'] + tx * res
    y0 = settings['origin_y'] + ty * res
    probe_points_local = [
        (0, 0), (res - 1, 0), (0, res - 1), (res - 1, res - 1), (res // 2, res // 2)
    ]

    tile_passed = True
    for px, py in probe_points_local:
        # Uniform tiles are stored as a single pixel.
        if pixels.shape[:2] == (1, 1):
            baked_color = tuple(int(c) for c in pixels[0, 0])
        else:
            baked_color = tuple(int(c) for c in pixels[py, px])
        live_color = expected_color(settings, lut, x0 + px, y0 + py)

        result = "PASS" if baked_color == live_color else "FAIL"
        if result == "FAIL":
            tile_passed = False
        logger.info(f"  - Local pixel ({px}, {py}): Baked={baked_color}, Live={live_color} -> {result}")

    return tile_passed


def run_probe(bake_dir: str, logger: logging.Logger) -> bool:
    """Returns True when every probed pixel and reference vector matches."""
    manifest_path = os.path.join(bake_dir, "manifest.json")
    logger.info(f"Loading manifest from '{manifest_path}'...")
    try:
        with open(manifest_path, 'r') as f:
            manifest = json.load(f)
        with open(os.path.join(bake_dir, "generation_config.json"), 'r') as f:
            settings = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Could not load bake package from '{bake_dir}': {e}")
        return False

    lut = color_maps.create_lut(settings['palette'])

    logger.info("--- Reference Vectors ---")
    all_passed = check_reference_vectors(logger)

    width_tiles, height_tiles = manifest['world_dimensions_tiles']
    tiles_to_probe = {
        (0, 0),
        (width_tiles - 1, height_tiles - 1),
        (width_tiles // 2, height_tiles // 2),
    }
    for tx, ty in sorted(tiles_to_probe):
        if not probe_tile(logger, settings, lut, bake_dir, manifest, tx, ty):
            all_passed = False

    logger.info("--- Full Probe Complete ---")
    if all_passed:
        logger.info("SUCCESS: All probed tiles match the scalar noise functions.")
    else:
        logger.error("FAILURE: Mismatch detected in one or more tiles.")
    return all_passed


def main(argv=None):
    parser = argparse.ArgumentParser(description="Checks a baked noise package against the scalar noise path.")
    parser.add_argument(
        "--bake-dir",
        type=str,
        required=True,
        help="Directory containing manifest.json and generation_config.json."
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("FidelityProbe")
    sys.exit(0 if run_probe(args.bake_dir, logger) else 1)


if __name__ == "__main__":
    main()
