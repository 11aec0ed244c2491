"""Core module with frames, transformations, configuration and chain resolution."""

from .chain import TransformationChain
from .checker import ConfigurationChecker
from .configuration import Configuration
from .errors import ArgumentError, FrameGraphError, InvalidConfiguration, TransformationNotFound
from .frames import DynamicTransform, ExampleTransform, StaticTransform, Transform
from .manager import TransformationManager

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
