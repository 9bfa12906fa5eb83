"""Exceptions raised by the cube-face converter."""


class CubeFaceError(Exception):
    """Base class for conversion errors."""


class InvalidArgument(CubeFaceError, ValueError):
    """Bad face index, edge, parallelism or source buffer.  Raised before any work starts."""


class ConversionCancelled(CubeFaceError):
    """The cancellation signal was observed; no faces are returned."""


class WorkerFailure(CubeFaceError):
    """
    A work unit failed while filling its rows.

    Attributes:
        block: (start, end) range over the combined face × row index
        face:  face being filled when the failure happened, or None
    """

    def __init__(self, block: tuple[int, int], face=None, message: str = ""):
        self.block = block
        self.face = face
        where = f"block {block[0]}:{block[1]}"
        if face is not None:
            where += f" (face {int(face)})"
        super().__init__(f"{where} failed: {message}" if message else f"{where} failed")
