"""Frame and transformation registry.

A Configuration owns the set of declared frames, the store of static and
dynamic transformations and a separate store of example transformations.
Each store holds at most one transformation per unordered pair of frames:
registering a new one for the same pair replaces the previous entry,
whatever its direction.

Typical use:

    conf = Configuration()
    conf.frames("body", "laser")
    conf.static_transform([0, 0, 0.1], {"body": "laser"})
    conf.dynamic_transform("dynamixel", {"laser": "tilt"})
"""

from __future__ import annotations

from collections.abc import Iterator
from types import MappingProxyType
from typing import Any, TypeVar

from .checker import ConfigurationChecker, frame_name
from .errors import ArgumentError
from .frames import (
    DynamicTransform,
    ExampleTransform,
    GeometricTransform,
    StaticTransform,
    Transform,
    parse_geometry,
    split_frame_arguments,
)
from .logging import StructuredLogger, get_logger
from .types import FrameName, FramePair

T = TypeVar("T", bound=Transform)


def _find_key(store: dict[FramePair, T], from_frame: FrameName, to_frame: FrameName) -> FramePair | None:
    """Return the key under which the unordered pair is stored, if any."""
    if (from_frame, to_frame) in store:
        return (from_frame, to_frame)
    if (to_frame, from_frame) in store:
        return (to_frame, from_frame)
    return None


def _replace(store: dict[FramePair, T], transform: T) -> T | None:
    """Store transform, removing any entry for the same unordered pair."""
    key = _find_key(store, transform.from_frame, transform.to_frame)
    previous = store.pop(key) if key is not None else None
    store[transform.pair] = transform
    return previous


class Configuration:
    """Registry of frames and of the transformations between them.

    Args:
        checker: Validation policy. Defaults to a checker accepting any
            producer.
        logger: Logger receiving registration events
    """

    def __init__(
        self,
        checker: ConfigurationChecker | None = None,
        logger: StructuredLogger | None = None,
    ):
        self.checker = checker if checker is not None else ConfigurationChecker()
        self.logger = logger if logger is not None else get_logger(__name__)
        self._frames: set[FrameName] = set()
        self._transforms: dict[FramePair, Transform] = {}
        self._example_transforms: dict[FramePair, ExampleTransform] = {}

    # Frames

    def frames(self, *names: Any) -> set[FrameName]:
        """Declare frames and return the set of all declared frames.

        Declaring a frame twice is harmless.

        Raises:
            InvalidConfiguration: If one of the names is invalid. No frame is
                declared in that case.
        """
        normalized = [frame_name(name) for name in names]
        for name in normalized:
            self.checker.check_frame(name)
        self._frames.update(normalized)
        return set(self._frames)

    def has_frame(self, name: Any) -> bool:
        return frame_name(name) in self._frames

    # Registration

    def _prepare(self, transform: T) -> T:
        """Validate a transformation before it is stored."""
        for endpoint in (transform.from_frame, transform.to_frame):
            self.checker.check_frame(endpoint)
        if transform.from_frame == transform.to_frame:
            raise ArgumentError(
                f"cannot register a transformation from {transform.from_frame} to itself"
            )
        self.checker.check_transformation(self._frames | transform.frames, transform)
        return transform

    def _register(self, store: dict[FramePair, T], transform: T) -> T:
        self._frames.update(transform.pair)
        previous = _replace(store, transform)
        if previous is not None:
            self.logger.debug(
                "replaced transformation",
                {"previous": str(previous), "transform": str(transform)},
            )
        else:
            self.logger.debug("registered transformation", {"transform": str(transform)})
        return transform

    def _geometric(self, cls: type[GeometricTransform], args: tuple[Any, ...]) -> GeometricTransform:
        (from_frame, to_frame), values = split_frame_arguments(args)
        translation, rotation = parse_geometry(values)
        return self._prepare(
            cls(frame_name(from_frame), frame_name(to_frame), translation, rotation)
        )

    def static_transform(self, *args: Any) -> StaticTransform:
        """Register a static transformation.

        Accepts up to two geometric values (a translation 3-vector and/or a
        rotation) followed by a single-entry ``{from: to}`` mapping, or the
        two frame names followed by the geometric values. Frames that are
        not declared yet are declared.

        Returns:
            The stored transformation

        Raises:
            ArgumentError: If no geometric value is given, more than two are
                given, a value is neither a translation nor a rotation, or
                from and to are the same frame
            InvalidConfiguration: If a frame name is invalid
        """
        transform = self._geometric(StaticTransform, args)
        assert isinstance(transform, StaticTransform)
        return self._register(self._transforms, transform)

    def dynamic_transform(self, *args: Any) -> DynamicTransform:
        """Register a transformation produced at runtime by a producer.

        Called as ``dynamic_transform(producer, {from: to})`` or
        ``dynamic_transform(from, to, producer)``. The producer is validated
        by the checker; errors raised by the producer check propagate
        unchanged.
        """
        (from_frame, to_frame), payload = split_frame_arguments(args)
        if len(payload) != 1:
            raise ArgumentError(f"expected exactly one producer, got {len(payload)} values")
        (producer,) = payload
        self.checker.check_producer(producer)
        transform = self._prepare(
            DynamicTransform(frame_name(from_frame), frame_name(to_frame), producer)
        )
        return self._register(self._transforms, transform)

    def example_transform(self, *args: Any) -> ExampleTransform:
        """Register an example transformation.

        Same arguments as static_transform. Example transformations are kept
        apart from the static and dynamic ones and are never used to resolve
        chains.
        """
        transform = self._geometric(ExampleTransform, args)
        assert isinstance(transform, ExampleTransform)
        return self._register(self._example_transforms, transform)

    # Queries

    def _check_known(self, *names: FrameName) -> None:
        for name in names:
            if name not in self._frames:
                raise ArgumentError(f"{name} is not a known frame")

    def has_transformation(self, from_frame: Any, to_frame: Any) -> bool:
        """Whether a static or dynamic transformation links the two frames.

        Raises:
            ArgumentError: If no transformation exists and one of the frames
                is not declared
        """
        from_frame, to_frame = frame_name(from_frame), frame_name(to_frame)
        if _find_key(self._transforms, from_frame, to_frame) is not None:
            return True
        self._check_known(from_frame, to_frame)
        return False

    def transformation_for(self, from_frame: Any, to_frame: Any) -> Transform:
        """Return the transformation registered between two frames.

        The returned transformation may be registered in the opposite
        direction.

        Raises:
            ArgumentError: If a frame is not declared, or if no transformation
                is registered between the two frames
        """
        from_frame, to_frame = frame_name(from_frame), frame_name(to_frame)
        self._check_known(from_frame, to_frame)
        key = _find_key(self._transforms, from_frame, to_frame)
        if key is None:
            raise ArgumentError(f"no transformation registered between {from_frame} and {to_frame}")
        return self._transforms[key]

    def example_transformation_for(self, from_frame: Any, to_frame: Any) -> ExampleTransform:
        """Return the example transformation between two frames.

        If none is registered, an identity example is synthesized, provided
        both frames are declared.
        """
        from_frame, to_frame = frame_name(from_frame), frame_name(to_frame)
        key = _find_key(self._example_transforms, from_frame, to_frame)
        if key is not None:
            return self._example_transforms[key]
        self._check_known(from_frame, to_frame)
        return ExampleTransform(from_frame, to_frame)

    @property
    def transformations(self) -> MappingProxyType[FramePair, Transform]:
        return MappingProxyType(self._transforms)

    @property
    def example_transformations(self) -> MappingProxyType[FramePair, ExampleTransform]:
        return MappingProxyType(self._example_transforms)

    def each_transform(self) -> Iterator[Transform]:
        yield from list(self._transforms.values())

    def each_static_transform(self) -> Iterator[StaticTransform]:
        for transform in self.each_transform():
            if isinstance(transform, StaticTransform):
                yield transform

    def each_dynamic_transform(self) -> Iterator[DynamicTransform]:
        for transform in self.each_transform():
            if isinstance(transform, DynamicTransform):
                yield transform

    def each_example_transform(self) -> Iterator[ExampleTransform]:
        yield from list(self._example_transforms.values())

    def __len__(self) -> int:
        return len(self._transforms)

    # Composition

    def copy(self) -> Configuration:
        """Duplicate this configuration.

        Frame set and stores are independent from the original, and so are
        the translation and rotation of each transformation.
        """
        result = Configuration(checker=self.checker, logger=self.logger)
        result._frames = set(self._frames)
        result._transforms = {key: t.copy() for key, t in self._transforms.items()}
        result._example_transforms = {
            key: t.copy() for key, t in self._example_transforms.items()  # type: ignore[misc]
        }
        return result

    __copy__ = copy

    def clear(self) -> None:
        self._frames.clear()
        self._transforms.clear()
        self._example_transforms.clear()

    def merge(self, other: Configuration) -> Configuration:
        """Merge other into this configuration.

        Frames are unioned. On conflicting pairs, the entries of other
        replace the entries of self.

        Returns:
            self
        """
        self._frames.update(other._frames)
        for transform in other._transforms.values():
            _replace(self._transforms, transform.copy())
        for example in other._example_transforms.values():
            _replace(self._example_transforms, example.copy())  # type: ignore[arg-type]
        self.logger.debug(
            "merged configuration",
            {"frames": len(self._frames), "transformations": len(self._transforms)},
        )
        return self

    def compatible_with(self, other: Configuration) -> bool:
        """Whether both configurations agree on every pair they both define."""
        for (from_frame, to_frame), transform in self._transforms.items():
            key = _find_key(other._transforms, from_frame, to_frame)
            if key is not None and other._transforms[key] != transform:
                return False
        return True

    # Rendering

    def describe(self) -> str:
        """Multi-line summary of frames and transformations."""
        lines = ["Frames:"]
        lines.extend(f"  {name}" for name in sorted(self._frames))
        lines.append("Static transformations:")
        lines.extend(f"  {t}" for t in self.each_static_transform())
        lines.append("Dynamic transformations:")
        lines.extend(f"  {t}" for t in self.each_dynamic_transform())
        lines.append("Example transformations:")
        lines.extend(f"  {t}" for t in self.each_example_transform())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"<Configuration frames={len(self._frames)} transformations={len(self._transforms)} "
            f"examples={len(self._example_transforms)}>"
        )


__all__ = ["Configuration"]
