"""Frame transformations for the frame graph.

A transformation links two named frames. Static and example transformations
carry a translation vector and a rotation; dynamic transformations carry an
opaque producer that supplies the value at runtime. Values are stored as
given, no transform algebra happens here.

Rotations are ``scipy.spatial.transform.Rotation`` instances. Quaternions given
as plain sequences use the scalar-last ``(x, y, z, w)`` order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from scipy.spatial.transform import Rotation

from .errors import ArgumentError
from .types import FrameName, FramePair, Producer, Quaternion, Translation


def zero_translation() -> Translation:
    """Create a zero translation vector."""
    return np.zeros(3, dtype=np.float64)


def identity_rotation() -> Rotation:
    """Create an identity rotation."""
    return Rotation.identity()


def as_translation(value: Any) -> Translation | None:
    """Convert a value to a translation vector.

    Returns:
        A fresh float64 array of shape (3,), or None if the value is not a
        3-vector
    """
    if isinstance(value, (str, bytes, Rotation)):
        return None
    try:
        vector = np.array(value, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if vector.shape != (3,):
        return None
    return vector


def as_rotation(value: Any) -> Rotation | None:
    """Convert a value to a single rotation.

    Accepts Rotation instances and scalar-last quaternions.

    Returns:
        A Rotation independent from the input, or None if the value is not
        quaternion-like
    """
    if isinstance(value, Rotation):
        if not value.single:
            return None
        return Rotation.from_quat(value.as_quat())
    if isinstance(value, (str, bytes)):
        return None
    try:
        quat = np.array(value, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if quat.shape != (4,):
        return None
    try:
        return Rotation.from_quat(quat)
    except ValueError:
        # zero-norm quaternion
        return None


def parse_geometry(values: Sequence[Any]) -> tuple[Translation, Rotation]:
    """Interpret up to two positional geometric values.

    Each value must be either a translation (3-vector) or a rotation
    (quaternion-like). Missing parts default to zero translation and identity
    rotation.

    Args:
        values: The geometric arguments of a registration call

    Returns:
        (translation, rotation) tuple

    Raises:
        ArgumentError: If no value is given, more than two are given, a value is
            neither a translation nor a rotation, or both values are of the same
            kind
    """
    if not values:
        raise ArgumentError("no translation or rotation given")
    if len(values) > 2:
        raise ArgumentError(
            f"expected at most a translation and a rotation, got {len(values)} values"
        )

    translation: Translation | None = None
    rotation: Rotation | None = None
    for value in values:
        as_vector = as_translation(value)
        if as_vector is not None:
            if translation is not None:
                raise ArgumentError("translation given twice")
            translation = as_vector
            continue

        as_quat = as_rotation(value)
        if as_quat is not None:
            if rotation is not None:
                raise ArgumentError("rotation given twice")
            rotation = as_quat
            continue

        raise ArgumentError(
            f"{value!r} is neither a translation (3-vector) nor a rotation (quaternion)"
        )

    if translation is None:
        translation = zero_translation()
    if rotation is None:
        rotation = identity_rotation()
    return translation, rotation


def split_frame_arguments(args: Sequence[Any]) -> tuple[FramePair, tuple[Any, ...]]:
    """Separate the frame pair from the payload of a registration call.

    Two call shapes are accepted: a single-entry ``{from: to}`` mapping as the
    last argument, or the two frame names as the leading arguments.

    Returns:
        ((from, to), payload_arguments)
    """
    args = tuple(args)
    if args and isinstance(args[-1], Mapping):
        mapping = args[-1]
        if len(mapping) != 1:
            raise ArgumentError(
                f"expected a single from => to entry, got {len(mapping)}: {dict(mapping)!r}"
            )
        ((from_frame, to_frame),) = mapping.items()
        return (from_frame, to_frame), args[:-1]

    if len(args) >= 2 and isinstance(args[0], str) and isinstance(args[1], str):
        return (args[0], args[1]), args[2:]

    raise ArgumentError("expected a {from: to} mapping or leading frame names")


def _format_vector(values: Sequence[float]) -> str:
    return "(" + ", ".join(f"{v:g}" for v in values) + ")"


@dataclass(eq=False)
class Transform:
    """Base of all transformations: an ordered pair of frame names."""

    from_frame: FrameName
    to_frame: FrameName

    @property
    def pair(self) -> FramePair:
        return (self.from_frame, self.to_frame)

    @property
    def frames(self) -> frozenset[FrameName]:
        """The unordered pair of frames this transformation links."""
        return frozenset(self.pair)

    def other_frame(self, frame: FrameName) -> FrameName:
        """Return the frame at the opposite end of this link."""
        if frame == self.from_frame:
            return self.to_frame
        if frame == self.to_frame:
            return self.from_frame
        raise ArgumentError(f"{frame} is not an endpoint of {self}")

    def copy(self) -> Transform:
        return type(self)(self.from_frame, self.to_frame)

    def _payload_equal(self, other: Transform) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.pair == other.pair and self._payload_equal(other)  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.from_frame} => {self.to_frame}"


@dataclass(eq=False)
class GeometricTransform(Transform):
    """Transformation with a fixed translation and rotation."""

    translation: Translation = field(default_factory=zero_translation)
    rotation: Rotation = field(default_factory=identity_rotation)

    def __post_init__(self) -> None:
        translation = as_translation(self.translation)
        if translation is None:
            raise ArgumentError(f"invalid translation {self.translation!r}")
        rotation = as_rotation(self.rotation)
        if rotation is None:
            raise ArgumentError(f"invalid rotation {self.rotation!r}")
        self.translation = translation
        self.rotation = rotation

    @property
    def quaternion(self) -> Quaternion:
        """Rotation as a scalar-last quaternion."""
        x, y, z, w = self.rotation.as_quat()
        return (float(x), float(y), float(z), float(w))

    def copy(self) -> GeometricTransform:
        # __post_init__ copies the translation array and the rotation
        return type(self)(self.from_frame, self.to_frame, self.translation, self.rotation)

    def _payload_equal(self, other: Transform) -> bool:
        assert isinstance(other, GeometricTransform)
        return bool(
            np.allclose(self.translation, other.translation)
            and self.rotation.approx_equal(other.rotation)
        )

    def __str__(self) -> str:
        return (
            f"{self.from_frame} => {self.to_frame} "
            f"t={_format_vector(self.translation)} q={_format_vector(self.quaternion)}"
        )


@dataclass(eq=False)
class StaticTransform(GeometricTransform):
    """Transformation whose value is known at configuration time."""

    pass


@dataclass(eq=False)
class ExampleTransform(GeometricTransform):
    """Placeholder value, used for estimation but never for chain resolution."""

    pass


@dataclass(eq=False)
class DynamicTransform(Transform):
    """Transformation supplied at runtime by ``producer``."""

    producer: Producer = None

    def copy(self) -> DynamicTransform:
        # Producers are handles on external entities and are shared
        return DynamicTransform(self.from_frame, self.to_frame, self.producer)

    def _payload_equal(self, other: Transform) -> bool:
        assert isinstance(other, DynamicTransform)
        if self.producer is other.producer:
            return True
        try:
            return bool(self.producer == other.producer)
        except ValueError:
            # array-like producers compare element-wise
            return bool(np.array_equal(self.producer, other.producer))

    def __str__(self) -> str:
        return f"{self.from_frame} => {self.to_frame} produced by {self.producer}"


__all__ = [
    "Transform",
    "GeometricTransform",
    "StaticTransform",
    "ExampleTransform",
    "DynamicTransform",
    "zero_translation",
    "identity_rotation",
    "as_translation",
    "as_rotation",
    "parse_geometry",
    "split_frame_arguments",
]
