"""Tests for the erase / staged recovery session."""

import numpy as np
import pytest

from tiling_tools.Geometry import distance
from tiling_tools.Tile import THICK, Tile
from tiling_tools.TileDataManager import ERASED, IDLE, RECOVERING, RecoveryStep, TileDataManager

SMALL_PATCH = {'width': 400, 'height': 300, 'iterations': 6, 'tile_size': 25, 'erase_radius': 50}


@pytest.fixture
def penrose():
    manager = TileDataManager(dict(SMALL_PATCH, mode='penrose'))
    manager.generate()
    return manager


@pytest.fixture
def periodic():
    manager = TileDataManager(dict(SMALL_PATCH, mode='periodic'))
    manager.generate()
    return manager


class TestGenerate:
    def test_fresh_session_is_idle(self, penrose):
        assert penrose.tiles
        assert penrose.state == IDLE
        assert penrose.erased == set()

    def test_switching_mode(self, penrose):
        penrose.generate('periodic')
        assert penrose.mode == 'periodic'
        assert {t.kind for t in penrose.tiles} == {'thick'}

    def test_unknown_mode(self, penrose):
        with pytest.raises(ValueError):
            penrose.generate('hexagonal')

    def test_regenerate_clears_erasure(self, penrose):
        penrose.erase(200 + 150j)
        penrose.generate()
        assert penrose.erased == set()
        assert penrose.state == IDLE


class TestErase:
    def test_disk_membership_is_strict(self, penrose):
        center = 200 + 150j
        erased = penrose.erase(center, 50)
        expected = {i for i, t in enumerate(penrose.tiles) if distance(t.center, center) < 50}
        assert erased == expected
        assert erased
        assert penrose.state == ERASED

    def test_default_radius_from_settings(self, periodic):
        periodic.erase(200 + 150j)
        assert periodic.erase_radius == 50

    def test_boundary_excludes_erased(self, penrose):
        penrose.erase(200 + 150j)
        boundary = penrose.boundary()
        assert boundary
        assert not set(boundary) & penrose.erased

    def test_no_boundary_before_erasing(self, penrose):
        assert penrose.boundary() == []

    def test_tile_centers(self, penrose):
        centers = penrose.tile_centers()
        assert centers.shape == (len(penrose.tiles), 2)
        assert centers[0, 0] == penrose.tiles[0].center.real
        assert centers[0, 1] == penrose.tiles[0].center.imag


class TestRecovery:
    def test_penrose_reveals_each_tile_once_outside_in(self, penrose):
        original = list(penrose.tiles)
        center = 200 + 150j
        erased = set(penrose.erase(center))

        steps = list(penrose.run_recovery())

        assert all(isinstance(s, RecoveryStep) for s in steps)
        assert sorted(s.index for s in steps) == sorted(erased)
        dists = [distance(penrose.tiles[s.index].center, center) for s in steps]
        assert all(a >= b for a, b in zip(dists, dists[1:]))
        assert penrose.tiles == original
        assert penrose.erased == set()
        assert penrose.state == IDLE

    def test_constraints_are_never_still_erased(self, penrose):
        remaining = set(penrose.erase(200 + 150j))
        penrose.begin_recovery()
        while penrose.state == RECOVERING:
            step = penrose.advance()
            remaining.discard(step.index)
            assert not set(step.constraints) & remaining
            assert step.index not in step.constraints

    def test_first_step_is_constrained_by_the_boundary(self, penrose):
        penrose.erase(200 + 150j)
        step = next(penrose.run_recovery())
        assert step.constraints

    def test_periodic_shifts_erased_tiles(self, periodic):
        original = list(periodic.tiles)
        erased = set(periodic.erase(200 + 150j))
        periodic.begin_recovery()

        for index, (before, after) in enumerate(zip(original, periodic.tiles)):
            if index in erased:
                assert after.center == before.center + (8 + 6j)
            else:
                assert after is before

    def test_configured_shift(self):
        manager = TileDataManager(dict(SMALL_PATCH, mode='periodic', shift=[-4.0, 2.0]))
        manager.generate()
        original = list(manager.tiles)
        erased = manager.erase(200 + 150j)
        manager.begin_recovery()
        index = min(erased)
        assert manager.tiles[index].center == original[index].center + (-4 + 2j)

    def test_empty_erasure_finishes_immediately(self, penrose):
        penrose.erase(-5000 - 5000j)
        assert penrose.begin_recovery() == []
        assert penrose.state == IDLE
        assert penrose.erased == set()

    def test_recover_requires_erasure(self, penrose):
        with pytest.raises(RuntimeError):
            penrose.begin_recovery()

    def test_advance_requires_recovery(self, penrose):
        with pytest.raises(RuntimeError):
            penrose.advance()

    def test_no_erase_during_recovery(self, penrose):
        penrose.erase(200 + 150j)
        penrose.begin_recovery()
        with pytest.raises(RuntimeError):
            penrose.erase(100 + 100j)


class TestPresentationHelpers:
    def test_pack_vertices(self, penrose):
        verts = penrose.pack_vertices()
        assert verts.shape == (len(penrose.tiles), 4, 2)
        assert verts.dtype == np.float32
        first = penrose.tiles[0].vertices[0]
        assert verts[0, 0, 0] == pytest.approx(first.real, abs=1e-3)
        assert verts[0, 0, 1] == pytest.approx(first.imag, abs=1e-3)

    def test_hit_test_finds_tile_at_its_center(self, periodic):
        for index in (0, len(periodic.tiles) // 2, len(periodic.tiles) - 1):
            c = periodic.tiles[index].center
            assert periodic.hit_test(c.real, c.imag) == index

    def test_hit_test_miss(self, periodic):
        assert periodic.hit_test(-10000, -10000) == -1

    def test_hit_test_empty(self):
        assert TileDataManager().hit_test(0, 0) == -1

    def test_hit_test_every_periodic_center(self, periodic):
        for index, tile in enumerate(periodic.tiles):
            assert periodic.hit_test(tile.center.real, tile.center.imag) == index

    def test_hit_test_either_winding(self):
        manager = TileDataManager()
        counter_clockwise = Tile(THICK, [0, 10, 10 + 10j, 10j])
        clockwise = Tile(THICK, [20, 20 + 10j, 30 + 10j, 30])
        manager.tiles = [counter_clockwise, clockwise]
        assert manager.hit_test(5, 5) == 0
        assert manager.hit_test(25, 5) == 1
        assert manager.hit_test(15, 5) == -1

    def test_hit_test_first_tile_wins_on_shared_edge(self):
        manager = TileDataManager()
        manager.tiles = [Tile(THICK, [0, 10, 10 + 10j, 10j]),
                         Tile(THICK, [10, 20, 20 + 10j, 10 + 10j])]
        assert manager.hit_test(10, 5) == 0
