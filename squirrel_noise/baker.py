# squirrel_noise/baker.py

"""
================================================================================
OFFLINE NOISE BAKER
================================================================================
A command-line tool for rendering a region of raw noise to a directory of
tile images ("baking"), e.g. to eyeball a seed for visible patterns or to ship
pre-rendered lookup textures.

Usage:
    squirrel-noise-bake --config path/to/your/config.json [--output DIR]

The config file holds a "noise_bake_parameters" object; any key it omits
falls back to the defaults in config.py.
================================================================================
"""
import argparse
import collections
import hashlib
import json
import logging
import multiprocessing
import os
import sys
import time
from typing import Optional

import numpy as np
from PIL import Image
from tqdm import tqdm

from . import color_maps
from . import config as DEFAULTS
from . import grid


_INTEGER_SETTINGS = (
    'seed', 'dimensions', 'slice_z', 'slice_t', 'origin_x', 'origin_y',
    'tile_resolution', 'width_tiles', 'height_tiles', 'num_workers',
)


def resolve_settings(user_config: dict) -> dict:
    """Consolidates user parameters with the internal defaults and validates them."""
    settings = {
        'seed': user_config.get('seed', DEFAULTS.DEFAULT_SEED),
        'dimensions': user_config.get('dimensions', DEFAULTS.DEFAULT_DIMENSIONS),
        'mode': user_config.get('mode', DEFAULTS.DEFAULT_MODE),
        'slice_z': user_config.get('slice_z', DEFAULTS.DEFAULT_SLICE_Z),
        'slice_t': user_config.get('slice_t', DEFAULTS.DEFAULT_SLICE_T),
        'origin_x': user_config.get('origin_x', 0),
        'origin_y': user_config.get('origin_y', 0),
        'tile_resolution': user_config.get('tile_resolution', DEFAULTS.TILE_RESOLUTION),
        'width_tiles': user_config.get('width_tiles', DEFAULTS.DEFAULT_WIDTH_TILES),
        'height_tiles': user_config.get('height_tiles', DEFAULTS.DEFAULT_HEIGHT_TILES),
        'palette': user_config.get('palette', DEFAULTS.DEFAULT_PALETTE),
        'num_workers': user_config.get('num_workers', DEFAULTS.DEFAULT_NUM_WORKERS),
    }

    for key in _INTEGER_SETTINGS:
        if isinstance(settings[key], bool) or not isinstance(settings[key], int):
            raise ValueError(f"{key} must be an integer, got {settings[key]!r}")

    if settings['dimensions'] not in (1, 2, 3, 4):
        raise ValueError(f"dimensions must be 1 to 4, got {settings['dimensions']!r}")
    if settings['mode'] not in DEFAULTS.NOISE_MODES:
        raise ValueError(f"Unknown noise mode '{settings['mode']}'. Expected one of {DEFAULTS.NOISE_MODES}.")
    if settings['palette'] not in color_maps.PALETTES:
        raise ValueError(f"Unknown palette '{settings['palette']}'. Expected one of {tuple(color_maps.PALETTES)}.")
    for key in ('tile_resolution', 'width_tiles', 'height_tiles'):
        if settings[key] < 1:
            raise ValueError(f"{key} must be positive, got {settings[key]!r}")
    if settings['num_workers'] < 0:
        raise ValueError(f"num_workers must not be negative, got {settings['num_workers']!r}")

    return settings


def tile_origin(settings: dict, tx: int, ty: int) -> tuple[int, int]:
    """Lattice coordinate of the top-left pixel of tile (tx, ty)."""
    res = settings['tile_resolution']
    return settings['origin_x'] + tx * res, settings['origin_y'] + ty * res


def bake_tile(settings: dict, tx: int, ty: int) -> np.ndarray:
    """
    Samples the noise values for a single tile, shape (res, res). 1D noise is
    drawn along x and repeated down every row.
    """
    res = settings['tile_resolution']
    x0, y0 = tile_origin(settings, tx, ty)
    dims = settings['dimensions']
    mode = settings['mode']

    if dims == 1:
        xs = np.arange(x0, x0 + res, dtype=np.int64)
        row = grid.sample(mode, xs, seed=settings['seed'])
        return np.tile(row, (res, 1))

    z = settings['slice_z'] if dims >= 3 else None
    t = settings['slice_t'] if dims == 4 else None
    return grid.noise_grid(x0, y0, res, res, seed=settings['seed'], z=z, t=t, mode=mode)


# --- Helper for Tile Compression ---
def save_tile_image(color_array: np.ndarray, directory: str, file_hash: str) -> str:
    """
    Saves an (H, W, 3) tile using a tiered, lossless compression strategy
    with Pillow. Returns the tier used.
    """
    os.makedirs(directory, exist_ok=True)
    file_path = os.path.join(directory, f"{file_hash}.png")

    # Tier 1: Perfectly uniform color is stored as a single pixel.
    if (color_array == color_array[0, 0]).all():
        img = Image.new('RGB', (1, 1), tuple(int(c) for c in color_array[0, 0]))
        img.save(file_path, 'PNG')
        return 'uniform'

    # Tier 2: Few enough colors for an exact palettized image.
    height, width, _ = color_array.shape
    palette, indices = np.unique(color_array.reshape(-1, 3), axis=0, return_inverse=True)
    if len(palette) <= 256:
        img = Image.frombytes('P', (width, height), indices.reshape(height, width).astype(np.uint8).tobytes())
        img.putpalette(palette.astype(np.uint8).ravel().tolist())
        img.save(file_path, 'PNG')
        return 'palettized'

    # Tier 3: Standard RGB PNG.
    Image.fromarray(np.ascontiguousarray(color_array, dtype=np.uint8)).save(file_path, 'PNG')
    return 'full'


# --- Global variables for worker processes ---
worker_settings = None
worker_lut = None
worker_tile_dir = None


def init_worker(settings, lut, tile_dir):
    """Initializes the global state for each worker process."""
    global worker_settings, worker_lut, worker_tile_dir
    worker_settings = settings
    worker_lut = lut
    worker_tile_dir = tile_dir
    logging.getLogger(f"Worker-{os.getpid()}").debug("Worker initialized.")


def process_tile(coords):
    """Bakes and SAVES a single tile. Returns only minimal metadata."""
    tx, ty = coords
    values = bake_tile(worker_settings, tx, ty)
    values01 = color_maps.normalize_for_display(values, worker_settings['mode'])
    color_array = color_maps.get_noise_color_array(values01, worker_lut)

    file_hash = hashlib.md5(color_array.tobytes()).hexdigest()
    compression_type = save_tile_image(color_array, worker_tile_dir, file_hash)
    return {'tx': tx, 'ty': ty, 'hash': file_hash, 'compression_type': compression_type}


# --- Main Baking Function ---
def bake_noise(config_path: str, output_dir: Optional[str] = None):
    """
    Loads a configuration, bakes every tile and writes the manifest.
    Returns the bake directory, or None if the configuration could not be read.
    """
    logger = logging.getLogger("NoiseBaker")

    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None

    settings = resolve_settings(config.get('noise_bake_parameters', {}))
    seed = settings['seed']

    base_output_dir = os.path.join(output_dir or DEFAULTS.DEFAULT_OUTPUT_DIR, f"seed_{seed}")
    tile_dir = os.path.join(base_output_dir, "tiles")
    os.makedirs(tile_dir, exist_ok=True)

    lut = color_maps.create_lut(settings['palette'])

    width_tiles = settings['width_tiles']
    height_tiles = settings['height_tiles']
    total_tiles = width_tiles * height_tiles
    logger.info(
        f"Baking {settings['dimensions']}D '{settings['mode']}' noise with seed {seed}: "
        f"{width_tiles}x{height_tiles} tiles of {settings['tile_resolution']}px"
    )

    tile_map = np.empty((height_tiles, width_tiles), dtype=object)
    saved_hashes = set()
    compression_stats = collections.Counter()
    tasks = [(tx, ty) for ty in range(height_tiles) for tx in range(width_tiles)]

    num_workers = settings['num_workers'] or max(1, multiprocessing.cpu_count() - 1)
    start_time = time.perf_counter()

    def record(result):
        tile_map[result['ty'], result['tx']] = result['hash']
        if result['hash'] not in saved_hashes:
            saved_hashes.add(result['hash'])
            compression_stats[result['compression_type']] += 1

    if num_workers == 1:
        init_worker(settings, lut, tile_dir)
        for result in tqdm(map(process_tile, tasks), total=total_tiles, desc="Baking Tiles"):
            record(result)
    else:
        logger.info(f"Using {num_workers} worker processes.")
        with multiprocessing.Pool(processes=num_workers, initializer=init_worker,
                                  initargs=(settings, lut, tile_dir)) as pool:
            for result in tqdm(pool.imap_unordered(process_tile, tasks), total=total_tiles, desc="Baking Tiles"):
                record(result)

    # --- Finalization ---
    manifest = {
        'seed': seed,
        'tile_resolution_pixels': settings['tile_resolution'],
        'world_dimensions_tiles': [width_tiles, height_tiles],
        'tile_map': tile_map.tolist(),
    }
    with open(os.path.join(base_output_dir, "manifest.json"), 'w') as f:
        json.dump(manifest, f, indent=2)
    with open(os.path.join(base_output_dir, "generation_config.json"), 'w') as f:
        json.dump(settings, f, indent=2)

    end_time = time.perf_counter()
    logger.info(f"Baking complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(
        f"{total_tiles} total -> {len(saved_hashes)} unique tiles saved "
        f"({compression_stats['uniform']} uniform, {compression_stats['palettized']} palettized, "
        f"{compression_stats['full']} full)"
    )
    logger.info(f"Baked noise and manifest.json saved to: {base_output_dir}")
    return base_output_dir


# --- Command-Line Interface ---
def main(argv=None):
    parser = argparse.ArgumentParser(description="Offline tile baker for SquirrelNoise5 raw noise.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON configuration file for the noise to be baked."
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help=f"Directory to bake into (default: {DEFAULTS.DEFAULT_OUTPUT_DIR})."
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    if bake_noise(args.config, args.output) is None:
        sys.exit(1)


if __name__ == "__main__":
    main()
