# tiling_tools/Geometry.py
"""
Point helpers shared by the generators and the recovery module.
Points are complex numbers: x is the real part, y the imaginary part.
"""
import math

PHI = (1 + math.sqrt(5)) / 2


def lerp(p1, p2, t):
    """Point at parameter t on the segment p1 -> p2."""
    return p1 + (p2 - p1) * t


def distance(p1, p2):
    return abs(p1 - p2)


def calculate_centroid(vertices):
    """ Calculate the centroid from a list of vertices. """
    x_coords = [v.real for v in vertices]
    y_coords = [v.imag for v in vertices]
    centroid_x = sum(x_coords) / len(vertices)
    centroid_y = sum(y_coords) / len(vertices)
    return complex(centroid_x, centroid_y)


def points_close(p1, p2, tolerance):
    """Per-axis comparison used for vertex matching."""
    return abs(p1.real - p2.real) < tolerance and abs(p1.imag - p2.imag) < tolerance
