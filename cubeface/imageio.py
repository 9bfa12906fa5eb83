"""Pillow adapters: decode a panorama into an array, encode faces to files."""

import os

import numpy as np
from PIL import Image

Image.MAX_IMAGE_PIXELS = None   # allow very large panoramas

JPEG_QUALITY = 85
FORMATS = {
    'jpg': ('.jpg', 'JPEG'),
    'tif': ('.tif', 'TIFF'),
}


def load_panorama(path: str) -> np.ndarray:
    """Open *path* and return it as an (H, W, 3) uint8 RGB array."""
    with Image.open(path) as img:
        return np.array(img.convert('RGB'))


def face_paths(prefix: str, fmt: str = 'jpg') -> list[str]:
    """Output paths {prefix}_0 .. {prefix}_5 in face order."""
    ext, _ = FORMATS[fmt]
    return [f"{prefix}_{index}{ext}" for index in range(6)]


def save_faces(faces: list[np.ndarray], prefix: str,
               quality: int = JPEG_QUALITY, fmt: str = 'jpg') -> list[str]:
    """
    Write six face arrays next to *prefix* and return the written paths.

    JPEG output uses *quality*; TIFF output is lossless and ignores it.
    """
    if len(faces) != 6:
        raise ValueError(f"expected 6 faces, got {len(faces)}")
    if fmt not in FORMATS:
        raise ValueError(f"unknown output format {fmt!r}")

    out_dir = os.path.dirname(os.path.abspath(prefix))
    os.makedirs(out_dir, exist_ok=True)

    _, pil_format = FORMATS[fmt]
    paths = face_paths(prefix, fmt)
    for face, path in zip(faces, paths):
        img = Image.fromarray(face)
        if pil_format == 'JPEG':
            img.save(path, format=pil_format, quality=quality)
        else:
            img.save(path, format=pil_format)
    return paths
