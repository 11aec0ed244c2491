"""Frame graph package.

Maintain a registry of named reference frames and of the static or
producer-backed transformations between them, and resolve the shortest chain
of transformations connecting any two frames.
"""

from .core import (
    ArgumentError,
    Configuration,
    ConfigurationChecker,
    DynamicTransform,
    ExampleTransform,
    FrameGraphError,
    InvalidConfiguration,
    StaticTransform,
    Transform,
    TransformationChain,
    TransformationManager,
    TransformationNotFound,
)

__version__ = "0.1.0"

__all__ = [
    "ArgumentError",
    "Configuration",
    "ConfigurationChecker",
    "DynamicTransform",
    "ExampleTransform",
    "FrameGraphError",
    "InvalidConfiguration",
    "StaticTransform",
    "Transform",
    "TransformationChain",
    "TransformationManager",
    "TransformationNotFound",
]
