from .Tile import Tile, THICK, THIN, tile_to_path
from .PenroseTiling import generate_penrose_tiling
from .PeriodicTiling import generate_periodic_tiling, shift_tiles
from .Recovery import (
    recover_tiles, get_boundary_tiles, get_recovery_order, get_neighbors,
    build_neighbor_graph, PENROSE, PERIODIC,
)
from .Operations import Operations
from .TileDataManager import TileDataManager, RecoveryStep
from .TileRenderer import TileRenderer

__all__ = ['Tile', 'THICK', 'THIN', 'tile_to_path',
           'generate_penrose_tiling', 'generate_periodic_tiling', 'shift_tiles',
           'recover_tiles', 'get_boundary_tiles', 'get_recovery_order', 'get_neighbors',
           'build_neighbor_graph', 'PENROSE', 'PERIODIC',
           'Operations', 'TileDataManager', 'RecoveryStep', 'TileRenderer']
