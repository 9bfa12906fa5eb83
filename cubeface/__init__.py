"""Equirectangular panorama → six cube faces."""

from .errors import ConversionCancelled, CubeFaceError, InvalidArgument, WorkerFailure
from .faces import FACE_AXES, Face, face_directions, map_to_direction
from .partition import partition
from .pipeline import DEFAULT_EDGE, allocate_faces, convert
from .sampler import Policy, sample, sample_directions, source_coordinates

__version__ = '0.1.0'

__all__ = [
    'ConversionCancelled', 'CubeFaceError', 'InvalidArgument', 'WorkerFailure',
    'FACE_AXES', 'Face', 'face_directions', 'map_to_direction',
    'partition',
    'DEFAULT_EDGE', 'allocate_faces', 'convert',
    'Policy', 'sample', 'sample_directions', 'source_coordinates',
]
