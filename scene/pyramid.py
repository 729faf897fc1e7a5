# scene/pyramid.py
# Canonical test volume: a square pyramid whose four faces carry four colors.

from enum import Enum

from codec.surface import GRID_SIZE, Voxel


class Quadrant(Enum):
    POS_POS = "x>=0,y>=0"
    NEG_POS = "x<0,y>=0"
    NEG_NEG = "x<0,y<0"
    POS_NEG = "x>=0,y<0"


QUADRANT_COLORS = {
    Quadrant.POS_POS: 0b111,
    Quadrant.NEG_POS: 0b001,
    Quadrant.NEG_NEG: 0b010,
    Quadrant.POS_NEG: 0b101,
}


def classify_quadrant(xi: int, yi: int) -> Quadrant:
    """Zero counts as non-negative, so the apex column lands in POS_POS."""
    if xi >= 0:
        return Quadrant.POS_POS if yi >= 0 else Quadrant.POS_NEG
    return Quadrant.NEG_POS if yi >= 0 else Quadrant.NEG_NEG


def gen_pyramid_surface(size: int = GRID_SIZE):
    half = size // 2
    surface = []
    for x in range(size):
        for y in range(size):
            xi = x - half
            yi = y - half
            h = half - (abs(xi) + abs(yi))
            if h < 0:
                continue
            z = abs(h)
            surface.append(Voxel(x, y, z, QUADRANT_COLORS[classify_quadrant(xi, yi)]))
    return surface
