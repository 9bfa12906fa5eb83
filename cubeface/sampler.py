"""
sampler.py — Sample an equirectangular panorama along viewing directions.

Spherical coordinates of a direction (x, y, z):
    theta = atan2(y, x)             ∈ (-π, π]
    phi   = atan2(z, sqrt(x² + y²)) ∈ [-π/2, π/2]

Source pixel coordinates assume width == 2 × height:
    u = (theta + π) / π × H
    v = (π/2 - phi) / π × H

Indices are clamped to the image, never wrapped, so samples at the ±180°
seam and at the poles reuse edge pixels.
"""

import math
from enum import Enum

import numpy as np

from .errors import InvalidArgument

PI = math.pi
HALF_PI = PI / 2.0


class Policy(Enum):
    NEAREST = 'nearest'
    BILINEAR = 'bilinear'


def check_policy(policy) -> Policy:
    try:
        return Policy(policy)
    except ValueError:
        names = ', '.join(p.value for p in Policy)
        raise InvalidArgument(f"unknown resampling policy {policy!r} (expected {names})") from None


def check_source(source) -> np.ndarray:
    """Return *source* as an (H, W, 3) uint8 array or raise InvalidArgument."""
    if not isinstance(source, np.ndarray):
        try:
            source = np.asarray(source)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"source is not an image buffer: {exc}") from None
    if source.ndim != 3 or source.shape[2] != 3:
        raise InvalidArgument(f"source must have shape (H, W, 3), got {source.shape}")
    if source.dtype != np.uint8:
        raise InvalidArgument(f"source must be uint8, got {source.dtype}")
    if source.shape[0] == 0 or source.shape[1] == 0:
        raise InvalidArgument(f"source has zero size: {source.shape[1]} × {source.shape[0]}")
    return source


# ── Projection ────────────────────────────────────────────────────────────────

def source_coordinates(dx, dy, dz, width: int, height: int):
    """
    Map directions to source pixel coordinates.

    Returns:
        (uf, vf, ui, vi): fractional coordinates and their floor, clamped to
        [0, width - 1] and [0, height - 1].
    """
    dx = np.asarray(dx, dtype=np.float64)
    dy = np.asarray(dy, dtype=np.float64)
    dz = np.asarray(dz, dtype=np.float64)

    theta = np.arctan2(dy, dx)
    r = np.sqrt(dx * dx + dy * dy)
    phi = np.arctan2(dz, r)

    uf = (theta + PI) / PI * height
    vf = (HALF_PI - phi) / PI * height   # implicit assumption: height == width / 2

    ui = np.clip(np.floor(uf), 0, width - 1).astype(np.intp)
    vi = np.clip(np.floor(vf), 0, height - 1).astype(np.intp)
    return uf, vf, ui, vi


def _lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + (b - a) * t


def sample_directions(dx, dy, dz, source: np.ndarray, policy=Policy.BILINEAR) -> np.ndarray:
    """
    Sample *source* along arrays of directions.

    Args:
        dx, dy, dz: direction components, any matching shape S
        source:     (H, W, 3) uint8 equirectangular image
        policy:     Policy.NEAREST or Policy.BILINEAR

    Returns:
        uint8 array of shape S + (3,)
    """
    source = check_source(source)
    policy = check_policy(policy)
    H, W = source.shape[:2]

    uf, vf, ui, vi = source_coordinates(dx, dy, dz, W, H)

    if policy is Policy.NEAREST:
        return source[vi, ui]

    u2 = np.minimum(ui + 1, W - 1)
    v2 = np.minimum(vi + 1, H - 1)
    # clamped indices can leave an offset of exactly 1 at the far edges
    mu = np.clip(uf - ui, 0.0, 1.0)[..., np.newaxis]
    nu = np.clip(vf - vi, 0.0, 1.0)[..., np.newaxis]

    a = source[vi, ui].astype(np.float64)
    b = source[vi, u2].astype(np.float64)
    c = source[v2, ui].astype(np.float64)
    d = source[v2, u2].astype(np.float64)

    result = _lerp(_lerp(a, b, mu), _lerp(c, d, mu), nu)
    return np.clip(result, 0, 255).astype(np.uint8)


def sample(direction, source: np.ndarray, policy=Policy.BILINEAR) -> tuple[int, int, int]:
    """Color (r, g, b) of *source* seen along a single *direction* (x, y, z)."""
    x, y, z = direction
    color = sample_directions(np.array([x], dtype=np.float64),
                              np.array([y], dtype=np.float64),
                              np.array([z], dtype=np.float64),
                              source, policy)[0]
    return int(color[0]), int(color[1]), int(color[2])
