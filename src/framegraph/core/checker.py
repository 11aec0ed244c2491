"""Validation policy for frame graph configurations.

The checker is injected into a Configuration. It validates frame names,
frame membership of transformation endpoints, and producers. Producer
validation is delegated to a caller-supplied callable.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable

from .errors import ArgumentError, InvalidConfiguration
from .frames import Transform
from .types import FrameName, Producer, ProducerCheck

FRAME_NAME_PATTERN = re.compile(r"\w+", re.ASCII)


def frame_name(name: object) -> FrameName:
    """Normalize a frame name to its string form."""
    if name is None:
        return ""
    return str(name)


class ConfigurationChecker:
    """Checks frames, transformations and producers.

    Args:
        producer_check: Optional callable validating a producer. It rejects a
            producer by raising (the exception is propagated unchanged) or by
            returning False. The default accepts anything.
    """

    def __init__(self, producer_check: ProducerCheck | None = None):
        self.producer_check = producer_check

    def check_frame(self, name: object, known_frames: Collection[FrameName] | None = None) -> None:
        """Validate a frame name, and its membership in known_frames if given.

        Raises:
            InvalidConfiguration: If the name is empty, is not a word, or is
                not one of known_frames
        """
        name = frame_name(name)
        if not name:
            raise InvalidConfiguration("frame names cannot be empty")
        if not FRAME_NAME_PATTERN.fullmatch(name):
            raise InvalidConfiguration(
                f"invalid frame name '{name}': frame names can only contain letters, "
                "digits and underscores"
            )
        if known_frames is not None and name not in known_frames:
            raise InvalidConfiguration(
                f"frame '{name}' is not known. Known frames: {', '.join(sorted(known_frames))}"
            )

    def check_transformation(self, frames: Collection[FrameName], transform: Transform) -> None:
        """Validate that both endpoints of transform are known frames.

        All violations are reported together.
        """
        errors = []
        for endpoint in (transform.from_frame, transform.to_frame):
            try:
                self.check_frame(endpoint, frames)
            except InvalidConfiguration as e:
                errors.append(f"transformation {transform.from_frame} => {transform.to_frame}: {e}")
        if errors:
            raise InvalidConfiguration("\n".join(errors))

    def check_transformation_frames(
        self, frames: Collection[FrameName], transforms: Iterable[Transform]
    ) -> None:
        for transform in transforms:
            self.check_transformation(frames, transform)

    def check_producer(self, producer: Producer) -> None:
        if self.producer_check is None:
            return
        if self.producer_check(producer) is False:
            raise ArgumentError(f"{producer!r} is not a valid transformation producer")


__all__ = [
    "FRAME_NAME_PATTERN",
    "ConfigurationChecker",
    "frame_name",
]
