"""Type definitions and aliases for the frame graph."""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

# Frames are identified by name only
FrameName = str
FramePair = tuple[FrameName, FrameName]

# Geometric payloads
Translation = NDArray[np.float64]
Quaternion = tuple[float, float, float, float]  # scalar-last (x, y, z, w)

# Producers are opaque; the check raises (or returns False) to reject one
Producer = Any
ProducerCheck = Callable[[Producer], Any]

__all__ = [
    "FrameName",
    "FramePair",
    "Translation",
    "Quaternion",
    "Producer",
    "ProducerCheck",
]
