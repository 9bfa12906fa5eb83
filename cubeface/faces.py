"""
faces.py — Cube-face orientation and per-pixel viewing directions.

Face order (index → name):
    0 back   1 left   2 front   3 right   4 top   5 bottom

Coordinate system: +X = front, +Y = right, +Z = up.  Pixel (i, j) of a face of
side `edge` is normalised to a = 2i/edge - 1, b = 2j/edge - 1, and each face
assigns (±1, ±a, ±b) to the three axes.  The assignment lives in FACE_AXES
as a coefficient table applied to the vector (1, a, b).
"""

from enum import IntEnum

import numpy as np

from .errors import InvalidArgument


class Face(IntEnum):
    BACK = 0
    LEFT = 1
    FRONT = 2
    RIGHT = 3
    TOP = 4
    BOTTOM = 5


# ── Orientation table ─────────────────────────────────────────────────────────

# FACE_AXES[face] @ (1, a, b) == (x, y, z)
FACE_AXES = np.array([
    # back     x = -1   y = -a   z = -b
    [[-1, 0, 0], [0, -1, 0], [0, 0, -1]],
    # left     x =  a   y = -1   z = -b
    [[0, 1, 0], [-1, 0, 0], [0, 0, -1]],
    # front    x =  1   y =  a   z = -b
    [[1, 0, 0], [0, 1, 0], [0, 0, -1]],
    # right    x = -a   y =  1   z = -b
    [[0, -1, 0], [1, 0, 0], [0, 0, -1]],
    # top      x =  b   y =  a   z =  1
    [[0, 0, 1], [0, 1, 0], [1, 0, 0]],
    # bottom   x = -b   y =  a   z = -1
    [[0, 0, -1], [0, 1, 0], [-1, 0, 0]],
], dtype=np.float64)
FACE_AXES.setflags(write=False)


def check_face(face) -> Face:
    """Return *face* as a Face, raising InvalidArgument outside [0, 6)."""
    try:
        return Face(int(face))
    except (TypeError, ValueError):
        raise InvalidArgument(f"face must be in [0, 6), got {face!r}") from None


def check_edge(edge) -> int:
    if isinstance(edge, bool) or not isinstance(edge, (int, np.integer)):
        raise InvalidArgument(f"edge must be an integer, got {edge!r}")
    if edge <= 0:
        raise InvalidArgument(f"edge must be positive, got {edge}")
    return int(edge)


# ── Direction vectors ─────────────────────────────────────────────────────────

def _apply(m: np.ndarray, a, b):
    # scalar and array inputs go through the same arithmetic
    return tuple(m[k, 0] + m[k, 1] * a + m[k, 2] * b for k in range(3))


def face_directions(face, edge: int, rows=None) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Direction vectors for a band of rows of one face.

    Args:
        face:  Face or index in [0, 6)
        edge:  face side length in pixels
        rows:  (start, stop) half-open row range; the whole face when None

    Returns:
        (dx, dy, dz), each float64 of shape (stop - start, edge).  Vectors are
        not normalised; the sampler only uses their angles.
    """
    face = check_face(face)
    edge = check_edge(edge)
    start, stop = (0, edge) if rows is None else rows
    if not 0 <= start <= stop <= edge:
        raise InvalidArgument(f"row range {start}:{stop} outside face of edge {edge}")

    a = 2.0 * np.arange(edge, dtype=np.float64) / edge - 1.0
    b = 2.0 * np.arange(start, stop, dtype=np.float64) / edge - 1.0
    aa, bb = np.meshgrid(a, b)   # shape (rows, edge)

    return _apply(FACE_AXES[face], aa, bb)


def map_to_direction(i: int, j: int, face, edge: int) -> tuple[float, float, float]:
    """Direction (x, y, z) seen through column *i*, row *j* of *face*."""
    face = check_face(face)
    edge = check_edge(edge)
    a = 2.0 * i / edge - 1.0
    b = 2.0 * j / edge - 1.0
    x, y, z = _apply(FACE_AXES[face], a, b)
    return float(x), float(y), float(z)
