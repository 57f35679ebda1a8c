# tiling_tools/Recovery.py
"""
Recovery of an erased region.

Penrose: the matching rules admit exactly one completion, and the generator
already produced it, so recovery hands back the original tiles and only the
reveal order matters.
Periodic: any translate of the grid is an equally valid completion; recovery
shows one of them by shifting the erased patch rigidly.
"""
import math
from collections import defaultdict

from tiling_tools.Geometry import distance, points_close

PENROSE = 'penrose'
PERIODIC = 'periodic'
MODES = (PENROSE, PERIODIC)

DEFAULT_SHIFT = complex(8, 6)


def recover_tiles(tiles, erased_indices, mode, shift=DEFAULT_SHIFT):
    """
    Return the completed tiling for the erased indices.
    Length and order always match the input; only erased entries may change.
    """
    if mode == PENROSE:
        return tiles
    if mode != PERIODIC:
        raise ValueError(f"Unknown tiling mode: {mode!r}")

    erased = set(erased_indices)
    return [tile.translated(shift) if index in erased else tile
            for index, tile in enumerate(tiles)]


def get_boundary_tiles(tiles, erased_indices, erase_center, erase_radius):
    """Non-erased tiles in the ring [0.8r, 1.5r) around the erased disk."""
    erased = set(erased_indices)
    inner = erase_radius * 0.8
    outer = erase_radius * 1.5
    boundary = []
    for index, tile in enumerate(tiles):
        if index in erased:
            continue
        d = distance(tile.center, erase_center)
        if inner <= d < outer:
            boundary.append(index)
    return boundary


def get_recovery_order(tiles, erased_indices, erase_center):
    """Erased indices, farthest from the erase center first."""
    return sorted(erased_indices,
                  key=lambda index: distance(tiles[index].center, erase_center),
                  reverse=True)


def _shared_vertex_count(target, other, tolerance):
    shared = 0
    for v1 in target.vertices:
        if any(points_close(v1, v2, tolerance) for v2 in other.vertices):
            shared += 1
    return shared


def get_neighbors(target_index, tiles, tolerance=1.0):
    """
    Tiles sharing an edge with the target, i.e. matching at least two of its
    vertices within tolerance. Recomputed on every call.
    """
    if not 0 <= target_index < len(tiles):
        raise IndexError(f"Tile index {target_index} out of range for {len(tiles)} tiles")

    target = tiles[target_index]
    neighbors = []
    for index, tile in enumerate(tiles):
        if index == target_index:
            continue
        if _shared_vertex_count(target, tile, tolerance) >= 2:
            neighbors.append(index)
    return neighbors


def _vertex_cell(v, tolerance):
    return (math.floor(v.real / tolerance), math.floor(v.imag / tolerance))


def build_neighbor_graph(tiles, tolerance=1.0):
    """
    Neighbor lists for every tile at once, using a vertex hash instead of
    the all-pairs scan. graph[i] equals get_neighbors(i, tiles, tolerance).
    """
    if tolerance <= 0:
        # Strict comparison: no vertex is ever close
        return {index: [] for index in range(len(tiles))}

    vertex_map = defaultdict(list)  # cell -> [(tile index, vertex)]
    for index, tile in enumerate(tiles):
        for v in tile.vertices:
            vertex_map[_vertex_cell(v, tolerance)].append((index, v))

    graph = {}
    for index, tile in enumerate(tiles):
        shared = defaultdict(int)
        for v1 in tile.vertices:
            cx, cy = _vertex_cell(v1, tolerance)
            matched = set()
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    for other, v2 in vertex_map.get((cx + dx, cy + dy), ()):
                        if other != index and other not in matched and points_close(v1, v2, tolerance):
                            matched.add(other)
            for other in matched:
                shared[other] += 1
        graph[index] = sorted(other for other, count in shared.items() if count >= 2)
    return graph
