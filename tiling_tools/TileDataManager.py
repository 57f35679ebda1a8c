# tiling_tools/TileDataManager.py
"""
Manages one tiling session for the erasure demo.
- Generates the Penrose or periodic tile list from the settings
- Erases a disk of tiles (vectorised center test)
- Steps through recovery outside-in, one tile per call, reporting the
  constraining neighbors of each revealed tile
- Provides packed numpy vertex data and hit testing for a presentation layer
Pacing between steps belongs to the caller.
"""
import logging
from collections import namedtuple

import numpy as np

from tiling_tools.Operations import DEFAULT_SETTINGS, shift_offset
from tiling_tools.PenroseTiling import generate_penrose_tiling
from tiling_tools.PeriodicTiling import generate_periodic_tiling
from tiling_tools.Recovery import (
    MODES, PENROSE, get_boundary_tiles, get_neighbors, get_recovery_order, recover_tiles,
)

IDLE = 'idle'
ERASED = 'erased'
RECOVERING = 'recovering'

RecoveryStep = namedtuple('RecoveryStep', ['index', 'constraints'])


class TileDataManager:
    """
    CPU-side session state: the current tile list, the erased index set and
    the pending recovery order.
    """

    def __init__(self, settings=None):
        self.logger = logging.getLogger('TileDataManager')
        self.settings = dict(DEFAULT_SETTINGS)
        if settings:
            self.settings.update(settings)

        self.mode = self.settings['mode']
        self.tiles = []
        self.erased = set()
        self.erase_center = None
        self.erase_radius = self.settings['erase_radius']
        self.state = IDLE

        self._order = []
        self._cursor = 0
        self.recovering_index = None

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, mode=None):
        """Build a fresh tiling for mode (defaults to the current one) and clear the erasure."""
        mode = mode or self.mode
        if mode not in MODES:
            raise ValueError(f"Unknown tiling mode: {mode!r}")

        s = self.settings
        if mode == PENROSE:
            self.tiles = generate_penrose_tiling(
                s['width'], s['height'], s['iterations'],
                tolerance=s['half_tile_tolerance'], margin=s['penrose_margin'])
        else:
            self.tiles = generate_periodic_tiling(
                s['width'], s['height'], s['tile_size'], margin=s['periodic_margin'])

        self.mode = mode
        self._reset_erasure()
        self.logger.info(f"Generated {len(self.tiles)} {mode} tiles")
        return self.tiles

    def _reset_erasure(self):
        self.erased = set()
        self.erase_center = None
        self.erase_radius = self.settings['erase_radius']
        self._order = []
        self._cursor = 0
        self.recovering_index = None
        self.state = IDLE

    # -------------------------------------------------------------------------
    # Erasure
    # -------------------------------------------------------------------------

    def tile_centers(self):
        """float64 array of shape (N, 2) holding each tile's cached center."""
        if not self.tiles:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([(t.center.real, t.center.imag) for t in self.tiles], dtype=np.float64)

    def erase(self, center, radius=None):
        """Erase every tile whose center lies strictly inside the disk."""
        if self.state == RECOVERING:
            raise RuntimeError("Cannot erase while a recovery is in progress")

        center = complex(center)
        radius = self.settings['erase_radius'] if radius is None else radius

        centers = self.tile_centers()
        dists = np.hypot(centers[:, 0] - center.real, centers[:, 1] - center.imag)
        self.erased = set(int(i) for i in np.nonzero(dists < radius)[0])
        self.erase_center = center
        self.erase_radius = radius
        self.state = ERASED
        self.logger.info(f"Erased {len(self.erased)} tiles around ({center.real:.1f}, {center.imag:.1f})")
        return self.erased

    def boundary(self):
        """Intact tiles ringing the erased disk."""
        if self.erase_center is None:
            return []
        return get_boundary_tiles(self.tiles, self.erased, self.erase_center, self.erase_radius)

    # -------------------------------------------------------------------------
    # Staged recovery
    # -------------------------------------------------------------------------

    def begin_recovery(self):
        """
        Swap in the recovered tiling and fix the reveal order.
        Periodic recovery shifts the erased tiles before the order is taken.
        """
        if self.state != ERASED:
            raise RuntimeError(f"Nothing to recover (state is {self.state!r})")

        erased_list = sorted(self.erased)
        self.tiles = recover_tiles(self.tiles, erased_list, self.mode,
                                   shift=shift_offset(self.settings))
        self._order = get_recovery_order(self.tiles, erased_list, self.erase_center)
        self._cursor = 0
        self.state = RECOVERING
        self.logger.info(f"Recovering {len(self._order)} {self.mode} tiles outside-in")

        if not self._order:
            self._finish_recovery()
        return list(self._order)

    def advance(self):
        """Reveal the next tile; returns the RecoveryStep that was taken."""
        if self.state != RECOVERING:
            raise RuntimeError("No recovery in progress")

        index = self._order[self._cursor]
        neighbors = get_neighbors(index, self.tiles, self.settings['neighbor_tolerance'])
        constraints = [n for n in neighbors if n not in self.erased]

        self.recovering_index = index
        self.erased.discard(index)
        self._cursor += 1
        if self._cursor >= len(self._order):
            self._finish_recovery()
        return RecoveryStep(index, constraints)

    def _finish_recovery(self):
        self.state = IDLE
        self.recovering_index = None
        if self.mode == PENROSE:
            self.logger.info("Recovery done: the pattern is fixed by its boundary")
        else:
            self.logger.info("Recovery done: recovered tiles are shifted, the phase was lost")

    def run_recovery(self):
        """Generator over every step of a recovery."""
        self.begin_recovery()
        while self.state == RECOVERING:
            yield self.advance()

    # -------------------------------------------------------------------------
    # Presentation helpers
    # -------------------------------------------------------------------------

    def pack_vertices(self):
        """float32 array of shape (N, 4, 2) with the corners of every tile."""
        n = len(self.tiles)
        verts = np.zeros((n, 4, 2), dtype=np.float32)
        for i, tile in enumerate(self.tiles):
            for j, v in enumerate(tile.vertices):
                verts[i, j, 0] = v.real
                verts[i, j, 1] = v.imag
        return verts

    def hit_test(self, x, y):
        """
        Find which tile contains the given point.
        Returns tile index or -1 if no tile found.
        """
        if not self.tiles:
            return -1

        verts = self.pack_vertices()
        p = np.array([x, y], dtype=np.float32)

        # Edge x (point - edge start) for all tiles and edges at once, shape (N, 4)
        edges = np.roll(verts, -1, axis=1) - verts
        rel = p - verts
        cross = edges[..., 0] * rel[..., 1] - edges[..., 1] * rel[..., 0]

        # Either winding: the first edge fixes the sign the others must keep
        inside = np.where(cross[:, 0] >= 0,
                          np.all(cross >= 0, axis=1),
                          np.all(cross <= 0, axis=1))
        hits = np.flatnonzero(inside)
        return int(hits[0]) if hits.size else -1
