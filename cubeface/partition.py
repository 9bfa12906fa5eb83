"""Split an index range into contiguous blocks for parallel workers."""

from typing import Iterator

from .errors import InvalidArgument


def partition(total: int, block_count: int) -> Iterator[tuple[int, int]]:
    """
    Yield half-open ranges (start, end) covering [0, total) exactly once.

    Blocks hold total // block_count indices (at least one); the last block
    absorbs the remainder, so it may be larger than the others but never
    smaller.  At most block_count blocks are produced, and none is empty
    unless total is 0, which yields the single block (0, 0).

    Example:
        >>> list(partition(10, 4))
        [(0, 2), (2, 4), (4, 6), (6, 10)]
    """
    if total < 0:
        raise InvalidArgument(f"total must not be negative, got {total}")

    block_count = max(block_count, 1)
    block_size = max(total // block_count, 1)
    start = 0
    for index in range(block_count):
        end = start + block_size
        if end + block_size > total or index == block_count - 1:
            end = total

        yield start, end

        if end >= total:
            return
        start = end
