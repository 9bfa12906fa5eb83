"""
pipeline.py — Convert an equirectangular panorama into six cube faces.

The combined index k = face × edge + row is split into contiguous blocks.
Each block is filled by one worker thread, writing whole rows of the face
arrays through slices it alone owns, so no locking is needed.  numpy
releases the GIL inside the projection and sampling kernels.
"""

import logging
import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

import numpy as np

from .errors import ConversionCancelled, InvalidArgument, WorkerFailure
from .faces import Face, check_edge, face_directions
from .partition import partition
from .sampler import Policy, check_policy, check_source, sample_directions

logger = logging.getLogger(__name__)

DEFAULT_EDGE = 4096
BACKGROUND = (255, 255, 255)
CHUNK_ROWS = 64   # rows filled between cancellation checks


def allocate_faces(edge: int) -> list[np.ndarray]:
    """Six (edge, edge, 3) uint8 faces filled with the white background."""
    edge = check_edge(edge)
    faces = []
    for _ in Face:
        face = np.empty((edge, edge, 3), dtype=np.uint8)
        face[...] = BACKGROUND
        faces.append(face)
    return faces


def default_parallelism() -> int:
    return os.cpu_count() or 1


def _check_parallelism(parallelism) -> int:
    if parallelism is None:
        return default_parallelism()
    if isinstance(parallelism, bool) or not isinstance(parallelism, (int, np.integer)):
        raise InvalidArgument(f"parallelism must be an integer, got {parallelism!r}")
    if parallelism <= 0:
        raise InvalidArgument(f"parallelism must be positive, got {parallelism}")
    return int(parallelism)


def _segments(block: tuple[int, int], edge: int, chunk_rows: int = CHUNK_ROWS):
    """Split a block of combined indices into (face, row_start, row_stop) bands.

    A band never crosses a face boundary and holds at most *chunk_rows* rows.
    """
    start, end = block
    k = start
    while k < end:
        face, row = divmod(k, edge)
        stop = min(end, (face + 1) * edge, k + chunk_rows)
        yield Face(face), row, row + (stop - k)
        k = stop


def _fill_block(block, faces, source, edge, policy, cancel) -> None:
    logger.debug("block %d:%d started", block[0], block[1])
    face = None
    try:
        for face, r0, r1 in _segments(block, edge):
            if cancel is not None and cancel.is_set():
                raise ConversionCancelled(f"cancelled in block {block[0]}:{block[1]}")
            dx, dy, dz = face_directions(face, edge, (r0, r1))
            faces[face][r0:r1] = sample_directions(dx, dy, dz, source, policy)
    except ConversionCancelled:
        raise
    except Exception as exc:
        raise WorkerFailure(block, face, str(exc)) from exc
    logger.debug("block %d:%d done", block[0], block[1])


def convert(source, edge: int = DEFAULT_EDGE, policy=Policy.BILINEAR,
            parallelism: int | None = None, cancel=None) -> list[np.ndarray]:
    """
    Project an equirectangular panorama onto the six faces of a cube.

    Args:
        source:      (H, W, 3) uint8 panorama, W == 2 × H for undistorted output
        edge:        output face side length in pixels
        policy:      Policy.NEAREST or Policy.BILINEAR (or their string values)
        parallelism: number of worker threads and blocks (default: CPU count)
        cancel:      optional object with is_set(), e.g. threading.Event,
                     polled before every chunk of rows and once more after
                     all blocks have finished

    Returns:
        list of six (edge, edge, 3) uint8 arrays in Face order

    Raises:
        InvalidArgument:     bad edge, policy, parallelism or source
        ConversionCancelled: *cancel* was set before the conversion returned
        WorkerFailure:       a block failed; .block and .face tell which
    """
    edge = check_edge(edge)
    policy = check_policy(policy)
    parallelism = _check_parallelism(parallelism)
    source = check_source(source)

    H, W = source.shape[:2]
    if W != 2 * H:
        logger.warning("source is %d × %d, not 2:1; cube faces will be distorted", W, H)

    if cancel is not None and cancel.is_set():
        raise ConversionCancelled("cancelled before conversion started")

    faces = allocate_faces(edge)
    blocks = list(partition(len(Face) * edge, parallelism))
    logger.debug("converting %d × %d → 6 × %d² (%s, %d blocks)",
                 W, H, edge, policy.value, len(blocks))

    with ThreadPoolExecutor(max_workers=parallelism) as executor:
        futures = [executor.submit(_fill_block, block, faces, source, edge, policy, cancel)
                   for block in blocks]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()

        failures = [f.exception() for f in futures
                    if f in done and f.exception() is not None]

    if failures:
        raise next((e for e in failures if isinstance(e, WorkerFailure)), failures[0])

    if cancel is not None and cancel.is_set():
        raise ConversionCancelled("cancelled before the last block finished")

    return faces
