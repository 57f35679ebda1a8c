# tiling_tools/PenroseTiling.py
"""
Penrose P3 rhombus tiling by subdivision.
- Starts from a sun of 10 golden triangles (half-tiles) around the patch center
- Deflates the half-tiles a fixed number of times
- Pairs half-tiles sharing a base edge back into rhombi (edge hashing)
- Keeps the rhombi whose center falls near the viewport
References:
- https://preshing.com/20110831/penrose-tiling-explained/
"""
import logging
import math
from collections import defaultdict

from tiling_tools.Geometry import PHI, lerp
from tiling_tools.Tile import Tile, THICK, THIN

logger = logging.getLogger('PenroseTiling')

LARGE = 'L'
SMALL = 'S'

# Large pairs are tagged thick and small pairs thin. Geometrically a large
# pair is the 36/144 rhombus and a small pair the 72/108 one.
RHOMBUS_KIND = {LARGE: THICK, SMALL: THIN}


class HalfTile:
    """Labeled triangle: apex plus the two base vertices shared with its partner."""
    __slots__ = ('kind', 'apex', 'base1', 'base2')

    def __init__(self, kind, apex, base1, base2):
        self.kind = kind
        self.apex = apex
        self.base1 = base1
        self.base2 = base2

    @property
    def base_midpoint(self):
        return (self.base1 + self.base2) / 2

    def __repr__(self):
        return f"HalfTile({self.kind}, {self.apex}, {self.base1}, {self.base2})"


def subdivide(halves):
    """One deflation step over the whole half-tile list."""
    result = []
    for h in halves:
        a, b, c = h.apex, h.base1, h.base2
        if h.kind == LARGE:
            p = lerp(a, b, 1 / PHI)
            result.append(HalfTile(LARGE, c, p, b))
            result.append(HalfTile(SMALL, p, c, a))
        else:
            q = lerp(b, a, 1 / PHI)
            r = lerp(b, c, 1 / PHI)
            result.append(HalfTile(SMALL, q, r, b))
            result.append(HalfTile(SMALL, r, c, a))
            result.append(HalfTile(LARGE, r, q, a))
    return result


def create_initial_sun(center, radius):
    """Ten large half-tiles around center; every other wedge is mirrored."""
    halves = []
    for i in range(10):
        angle = 2 * math.pi * i / 10 - math.pi / 2
        next_angle = 2 * math.pi * (i + 1) / 10 - math.pi / 2
        b = center + radius * complex(math.cos(angle), math.sin(angle))
        c = center + radius * complex(math.cos(next_angle), math.sin(next_angle))
        if i % 2 == 0:
            halves.append(HalfTile(LARGE, center, b, c))
        else:
            halves.append(HalfTile(LARGE, center, c, b))
    return halves


def _cell(p, cell_size):
    return (math.floor(p.real / cell_size), math.floor(p.imag / cell_size))


def _bases_match(h1, h2, tolerance):
    same = abs(h1.base1 - h2.base1) < tolerance and abs(h1.base2 - h2.base2) < tolerance
    flipped = abs(h1.base1 - h2.base2) < tolerance and abs(h1.base2 - h2.base1) < tolerance
    return same or flipped


def halves_to_tiles(halves, tolerance=2.0):
    """
    Pair half-tiles of the same kind whose base edges coincide.
    Each half-tile takes the first later unmatched partner, as a plain
    nested scan would; the base midpoint hash only narrows the candidates.
    Matching bases have midpoints closer than tolerance, so a 3x3 block of
    cells of that size always contains the partner.
    A tolerance of zero or less matches nothing.
    """
    if tolerance <= 0:
        return []

    buckets = defaultdict(list)
    for index, half in enumerate(halves):
        buckets[_cell(half.base_midpoint, tolerance)].append(index)

    used = set()
    tiles = []
    for i, h1 in enumerate(halves):
        if i in used:
            continue
        cx, cy = _cell(h1.base_midpoint, tolerance)
        partner = None
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for j in buckets.get((cx + dx, cy + dy), ()):
                    if j <= i or j in used:
                        continue
                    if partner is not None and j >= partner:
                        continue
                    h2 = halves[j]
                    if h2.kind == h1.kind and _bases_match(h1, h2, tolerance):
                        partner = j
        if partner is None:
            continue

        used.add(i)
        used.add(partner)
        h2 = halves[partner]
        tiles.append(Tile(RHOMBUS_KIND[h1.kind], [h1.apex, h1.base1, h2.apex, h1.base2]))

    return tiles


def is_visible(tile, width, height, margin):
    c = tile.center
    return -margin < c.real < width + margin and -margin < c.imag < height + margin


def generate_penrose_tiling(width, height, iterations=5, tolerance=2.0, margin=30):
    """
    Build the rhombus patch covering a width x height viewport.
    Half-tile count grows by about 2.6x per iteration; keep iterations
    below 10 for practical run times.
    """
    center = complex(width / 2, height / 2)
    radius = max(width, height) * 1.5

    halves = create_initial_sun(center, radius)
    for _ in range(iterations):
        halves = subdivide(halves)

    tiles = halves_to_tiles(halves, tolerance)
    visible = [t for t in tiles if is_visible(t, width, height, margin)]
    logger.debug(
        f"Penrose: {len(halves)} half-tiles, {len(tiles)} rhombi, "
        f"{len(visible)} visible after {iterations} iterations"
    )
    return visible
