# bake_overview.py

"""
================================================================================
BIOME OVERVIEW BAKER
================================================================================
This script is a command-line tool for rendering a rectangular block of the
chunk world into a single biome overview image. Each chunk becomes a
square of pixels in its overview colour, which makes it easy to inspect how
the biome field and population rules play out over a large area.

Chunks are generated in-process, one after another, and discarded after
their statistics are recorded. Nothing besides the image is written.

Usage:
    python bake_overview.py --config path/to/config.json --out overview.png
    python bake_overview.py --x0 -32 --z0 -32 --width 64 --height 64 --fast
================================================================================
"""
import sys
import json
import logging
import argparse
import collections
import time
import numpy as np
from PIL import Image
from scipy.ndimage import zoom
from tqdm import tqdm

from chunkworld import biomes
from chunkworld import color_maps
from chunkworld import config as DEFAULTS
from chunkworld import noise
from chunkworld.generator import ChunkGenerator
from chunkworld.objects import ObjectType


def load_config(config_path: str, logger: logging.Logger):
    """Loads a JSON config file. Returns None if it is missing or malformed."""
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None


def classify_region_fast(generator: ChunkGenerator, x0: int, z0: int, width: int, height: int) -> np.ndarray:
    """Biome id map from the vectorised noise path. No objects are generated."""
    settings = generator.settings
    cx_values = np.arange(x0, x0 + width, dtype=np.float64)
    cz_values = np.arange(z0, z0 + height, dtype=np.float64)
    field = noise.terrain_noise_grid(
        cx_values, cz_values,
        settings['terrain_noise_primary_frequency'],
        settings['terrain_noise_secondary_weight'],
        settings['terrain_noise_diagonal_frequency'],
        settings['terrain_noise_diagonal_weight'],
    )
    return color_maps.calculate_biome_id_map(field, generator.biome_table)


def generate_region(generator: ChunkGenerator, x0: int, z0: int, width: int, height: int):
    """
    Generates every chunk in the region. Returns the biome id map and a
    statistics dictionary.
    """
    biome_ids = np.zeros((height, width), dtype=np.uint8)
    stats = {
        'objects': collections.Counter(),
        'ruins': 0,
        'clouds': 0,
    }

    for row in tqdm(range(height), desc="Generating Rows"):
        cz = z0 + row
        for col in range(width):
            chunk = generator.generate_chunk(x0 + col, cz)
            biome_ids[row, col] = color_maps.BIOME_IDS[chunk.biome]
            for obj in chunk.objects:
                stats['objects'][obj.type.value] += 1
            stats['ruins'] += int(any(obj.type is ObjectType.RUINS for obj in chunk.objects))
            stats['clouds'] += int(any(obj.type is ObjectType.CLOUD for obj in chunk.objects))

    return biome_ids, stats


def save_overview(biome_ids: np.ndarray, pixels_per_chunk: int, out_path: str) -> tuple:
    """Upscales the id map with nearest-neighbour zoom and saves it as a PNG."""
    if pixels_per_chunk > 1:
        biome_ids = zoom(biome_ids, pixels_per_chunk, order=0, mode='nearest', grid_mode=True)
    lut = color_maps.create_biome_color_lut()
    img = Image.fromarray(color_maps.get_biome_color_array(biome_ids, lut), 'RGB')
    img.save(out_path, 'PNG')
    return img.size


def bake_overview(args) -> int:
    # 1. --- Setup Logging (Rule 2) ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("OverviewBaker")

    # 2. --- Load Configuration (Rule 1) ---
    config = {}
    if args.config:
        config = load_config(args.config, logger)
        if config is None:
            return 1

    world_params = config.get('world_generation_parameters', {})
    overview_params = config.get('overview', {})

    x0 = args.x0 if args.x0 is not None else overview_params.get('x0', -DEFAULTS.DEFAULT_OVERVIEW_WIDTH_CHUNKS // 2)
    z0 = args.z0 if args.z0 is not None else overview_params.get('z0', -DEFAULTS.DEFAULT_OVERVIEW_HEIGHT_CHUNKS // 2)
    width = args.width if args.width is not None else overview_params.get('width', DEFAULTS.DEFAULT_OVERVIEW_WIDTH_CHUNKS)
    height = args.height if args.height is not None else overview_params.get('height', DEFAULTS.DEFAULT_OVERVIEW_HEIGHT_CHUNKS)
    pixels_per_chunk = args.pixels_per_chunk if args.pixels_per_chunk is not None else overview_params.get('pixels_per_chunk', DEFAULTS.DEFAULT_OVERVIEW_PIXELS_PER_CHUNK)

    if width < 1 or height < 1 or pixels_per_chunk < 1:
        logger.critical("Region width, height and pixels per chunk must all be positive.")
        return 1

    # 3. --- Initialize the Generator ---
    generator = ChunkGenerator(config=world_params, logger=logger)

    logger.info(f"Baking overview of {width}x{height} chunks starting at ({x0}, {z0})...")
    start_time = time.perf_counter()

    # 4. --- Classify or Generate ---
    if args.fast:
        biome_ids = classify_region_fast(generator, x0, z0, width, height)
        stats = None
    else:
        biome_ids, stats = generate_region(generator, x0, z0, width, height)

    id_counts = np.bincount(biome_ids.ravel(), minlength=len(biomes.BIOME_ORDER))

    # 5. --- Save ---
    image_size = save_overview(biome_ids, pixels_per_chunk, args.out)
    end_time = time.perf_counter()
    logger.info(f"Overview complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Saved {image_size[0]}x{image_size[1]} image to: {args.out}")

    # --- Statistics ---
    total_chunks = width * height
    logger.info("--- Biome Coverage ---")
    for biome in biomes.BIOME_ORDER:
        count = int(id_counts[color_maps.BIOME_IDS[biome]])
        logger.info(f"  - {biome.value.capitalize()}: {count} chunks ({100.0 * count / total_chunks:.1f}%)")

    if stats is not None:
        logger.info("--- Features ---")
        logger.info(f"  - Ruins: {stats['ruins']} chunks ({100.0 * stats['ruins'] / total_chunks:.1f}%)")
        logger.info(f"  - Clouds: {stats['clouds']} chunks ({100.0 * stats['clouds'] / total_chunks:.1f}%)")
        for object_type, count in stats['objects'].most_common():
            logger.info(f"  - {object_type}: {count}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Biome overview baker for the chunk world generator.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    parser.add_argument("--out", type=str, default="overview.png", help="Output PNG path.")
    parser.add_argument("--x0", type=int, help="First chunk column (cx).")
    parser.add_argument("--z0", type=int, help="First chunk row (cz).")
    parser.add_argument("--width", type=int, help="Region width in chunks.")
    parser.add_argument("--height", type=int, help="Region height in chunks.")
    parser.add_argument("--pixels-per-chunk", dest="pixels_per_chunk", type=int, help="Pixels per chunk side.")
    parser.add_argument("--fast", action="store_true", help="Classify biomes only; skip object generation.")
    return parser


def main(argv=None) -> int:
    return bake_overview(build_parser().parse_args(argv))


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
