"""
Tests for cube-face orientation and direction vectors.

Run with: python -m pytest tests/test_faces.py
"""

import numpy as np
import pytest

from cubeface import FACE_AXES, Face, InvalidArgument, face_directions, map_to_direction

CANONICAL_AXES = {
    Face.BACK: (-1.0, 0.0, 0.0),
    Face.LEFT: (0.0, -1.0, 0.0),
    Face.FRONT: (1.0, 0.0, 0.0),
    Face.RIGHT: (0.0, 1.0, 0.0),
    Face.TOP: (0.0, 0.0, 1.0),
    Face.BOTTOM: (0.0, 0.0, -1.0),
}


def expected_direction(face, a, b):
    return {
        Face.BACK: (-1.0, -a, -b),
        Face.LEFT: (a, -1.0, -b),
        Face.FRONT: (1.0, a, -b),
        Face.RIGHT: (-a, 1.0, -b),
        Face.TOP: (b, a, 1.0),
        Face.BOTTOM: (-b, a, -1.0),
    }[face]


def test_face_order():
    assert [f.name for f in Face] == ['BACK', 'LEFT', 'FRONT', 'RIGHT', 'TOP', 'BOTTOM']
    assert [int(f) for f in Face] == list(range(6))
    assert FACE_AXES.shape == (6, 3, 3)


@pytest.mark.parametrize('edge', [2, 8, 64, 1000])
@pytest.mark.parametrize('face', list(Face))
def test_center_is_outward_axis(face, edge):
    """a = b = 0 maps to the pure ±1 axis of each face"""
    assert map_to_direction(edge // 2, edge // 2, face, edge) == CANONICAL_AXES[face]


@pytest.mark.parametrize('face', list(Face))
def test_orientation_table(face):
    edge = 16
    for i, j in [(0, 0), (3, 11), (15, 15), (0, 15), (9, 2)]:
        a = 2.0 * i / edge - 1.0
        b = 2.0 * j / edge - 1.0
        assert map_to_direction(i, j, face, edge) == pytest.approx(expected_direction(face, a, b))


def test_accepts_plain_int_face():
    assert map_to_direction(4, 4, 2, 8) == (1.0, 0.0, 0.0)


@pytest.mark.parametrize('face', [-1, 6, 42, 'front', None])
def test_invalid_face(face):
    with pytest.raises(InvalidArgument):
        map_to_direction(0, 0, face, 8)


def test_invalid_face_is_value_error():
    with pytest.raises(ValueError):
        map_to_direction(0, 0, 6, 8)


@pytest.mark.parametrize('edge', [0, -1, 2.5])
def test_invalid_edge(edge):
    with pytest.raises(InvalidArgument):
        map_to_direction(0, 0, Face.FRONT, edge)
    with pytest.raises(InvalidArgument):
        face_directions(Face.FRONT, edge)


@pytest.mark.parametrize('face', list(Face))
def test_grid_matches_scalar(face):
    """The array path uses exactly the scalar arithmetic"""
    edge = 7
    dx, dy, dz = face_directions(face, edge)
    assert dx.shape == dy.shape == dz.shape == (edge, edge)
    for j in range(edge):
        for i in range(edge):
            assert (dx[j, i], dy[j, i], dz[j, i]) == map_to_direction(i, j, face, edge)


def test_row_band():
    full = face_directions(Face.TOP, 10)
    band = face_directions(Face.TOP, 10, rows=(3, 7))
    for whole, part in zip(full, band):
        assert part.shape == (4, 10)
        np.testing.assert_array_equal(part, whole[3:7])


def test_row_band_out_of_range():
    with pytest.raises(InvalidArgument):
        face_directions(Face.TOP, 10, rows=(5, 11))
    with pytest.raises(InvalidArgument):
        face_directions(Face.TOP, 10, rows=(6, 5))


def test_table_is_read_only():
    with pytest.raises(ValueError):
        FACE_AXES[0, 0, 0] = 1.0
