"""Resolved transformation chains."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .frames import DynamicTransform, StaticTransform, Transform
from .types import FrameName, Producer


@dataclass
class TransformationChain:
    """Sequence of links connecting from_frame to to_frame.

    ``links`` are in application order from from_frame to to_frame.
    ``inversions[i]`` is True when ``links[i]`` is walked from its to_frame to
    its from_frame.
    """

    from_frame: FrameName
    to_frame: FrameName
    links: list[Transform] = field(default_factory=list)
    inversions: list[bool] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.links) != len(self.inversions):
            raise ValueError(
                f"got {len(self.links)} links but {len(self.inversions)} inversion flags"
            )

    @classmethod
    def identity(cls, frame: FrameName) -> TransformationChain:
        return cls(frame, frame)

    @property
    def is_identity(self) -> bool:
        return not self.links

    def partition(self) -> tuple[list[StaticTransform], list[Transform]]:
        """Split the links into static and non-static ones.

        Order is preserved within each group. Inversion flags are not carried
        over: use the position of a link in ``links`` to find its flag.
        """
        static: list[StaticTransform] = []
        other: list[Transform] = []
        for link in self.links:
            if isinstance(link, StaticTransform):
                static.append(link)
            else:
                other.append(link)
        return static, other

    def producers(self) -> list[Producer]:
        """Distinct producers of the dynamic links, in chain order."""
        result: list[Producer] = []
        for link in self.links:
            if isinstance(link, DynamicTransform) and link.producer not in result:
                result.append(link.producer)
        return result

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self) -> Iterator[tuple[Transform, bool]]:
        return iter(zip(self.links, self.inversions))

    def __str__(self) -> str:
        lines = [f"Transformation chain: {self.from_frame} => {self.to_frame}"]
        if self.is_identity:
            lines.append("  (identity)")
        for link, inverted in self:
            lines.append(f"  {link}{' (inverted)' if inverted else ''}")
        return "\n".join(lines)


__all__ = ["TransformationChain"]
