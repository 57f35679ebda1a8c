# tiling_tools/Tile.py
"""
Immutable rhombus tile shared by both generators.
Index in the generated list is the only identity a tile has; "recovery"
builds new Tile values instead of changing existing ones.
"""
import cmath

from tiling_tools.Geometry import calculate_centroid

THICK = 'thick'
THIN = 'thin'
KINDS = (THICK, THIN)


class Tile:
    __slots__ = ('_kind', '_vertices', '_center')

    def __init__(self, kind, vertices, center=None):
        if kind not in KINDS:
            raise ValueError(f"Unknown tile kind: {kind!r}")
        vertices = tuple(complex(v) for v in vertices)
        if len(vertices) != 4:
            raise ValueError(f"A tile needs exactly 4 vertices, got {len(vertices)}")
        self._kind = kind
        self._vertices = vertices
        # Cached so that disk tests over many tiles stay cheap
        self._center = calculate_centroid(vertices) if center is None else complex(center)

    @property
    def kind(self):
        return self._kind

    @property
    def vertices(self):
        return self._vertices

    @property
    def center(self):
        return self._center

    def translated(self, offset):
        """Return a copy moved by offset; the cached center moves with it."""
        offset = complex(offset)
        return Tile(self._kind, [v + offset for v in self._vertices], self._center + offset)

    def angles(self):
        """Interior angle at each vertex, in radians."""
        angles = []
        num_vertices = len(self._vertices)
        for i in range(num_vertices):
            a, b, c = self._vertices[i - 1], self._vertices[i], self._vertices[(i + 1) % num_vertices]
            ba = a - b
            bc = c - b
            angles.append(abs(cmath.phase(bc / ba)))
        return angles

    def normalized_edge(self, vertex1, vertex2):
        """Sort vertices based on their real parts first, and then imaginary parts if real parts are equal."""
        return (vertex1, vertex2) if (vertex1.real, vertex1.imag) < (vertex2.real, vertex2.imag) else (vertex2, vertex1)

    def edges(self):
        n = len(self._vertices)
        return [self.normalized_edge(self._vertices[i], self._vertices[(i + 1) % n]) for i in range(n)]

    def __hash__(self):
        return hash((self._kind, self._vertices, self._center))

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return False
        return (self._kind == other._kind and self._vertices == other._vertices
                and self._center == other._center)

    def __repr__(self):
        return f"Tile({self._kind}, center=({self._center.real:.2f}, {self._center.imag:.2f}))"


def tile_to_path(tile):
    """Closed polygon path: move to the first vertex, line to the rest, close."""
    first, *rest = tile.vertices
    segments = ' '.join(f"L {p.real} {p.imag}" for p in rest)
    return f"M {first.real} {first.imag} {segments} Z"
