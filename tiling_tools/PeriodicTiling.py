# tiling_tools/PeriodicTiling.py
"""
Periodic parallelogram grid used as the contrasting baseline.
No subdivision or reassembly, every grid cell yields one tile directly.
"""
import logging
import math

from tiling_tools.Tile import Tile, THICK

logger = logging.getLogger('PeriodicTiling')


def generate_periodic_tiling(width, height, tile_size=30, margin=50):
    """Staggered grid of congruent parallelograms, padded two cells beyond the viewport."""
    tiles = []
    cols = math.ceil(width / tile_size) + 4
    rows = math.ceil(height / tile_size) + 4

    for row in range(-2, rows):
        for col in range(-2, cols):
            # Odd rows sit half a tile to the right
            base_x = col * tile_size + (row % 2) * (tile_size / 2)
            base_y = row * tile_size * 0.9
            base = complex(base_x, base_y)

            vertices = [
                base,
                base + complex(tile_size, 0),
                base + complex(tile_size * 1.3, tile_size * 0.8),
                base + complex(tile_size * 0.3, tile_size * 0.8),
            ]
            center = base + complex(tile_size * 0.65, tile_size * 0.4)
            tile = Tile(THICK, vertices, center)

            c = tile.center
            if -margin < c.real < width + margin and -margin < c.imag < height + margin:
                tiles.append(tile)

    logger.debug(f"Periodic: {len(tiles)} visible tiles at size {tile_size}")
    return tiles


def shift_tiles(tiles, offset):
    """Translate the whole tiling; a periodic grid stays a valid tiling under any shift."""
    return [tile.translated(offset) for tile in tiles]
