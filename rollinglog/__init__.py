"""Top-level package for the rollinglog project."""

from .config import Capture, RollingConfig, load_config
from .errors import RollingLogError, RotationError, StreamClosedError
from .writer import RollingWriter

__all__ = [
    "Capture",
    "RollingConfig",
    "RollingLogError",
    "RollingWriter",
    "RotationError",
    "StreamClosedError",
    "load_config",
]
