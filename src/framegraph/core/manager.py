"""Transformation chain resolution.

The TransformationManager answers "which transformations connect frame A to
frame B" over a Configuration. The search is breadth-first, so the returned
chain has the smallest number of links. Links can be walked in either
direction; a path never walks the same link twice, but may come back to a
frame through another link.

Ties between chains of equal length are broken by discovery order: ad-hoc
producers first, then the configuration's transformations in registration
order.

Frames outside the source's connected component are rejected before the
search starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .chain import TransformationChain
from .checker import ConfigurationChecker, frame_name
from .configuration import Configuration
from .errors import ArgumentError, TransformationNotFound
from .frames import DynamicTransform, Transform
from .logging import StructuredLogger, get_logger
from .types import FrameName, FramePair, Producer

DEFAULT_MAX_SEEK_DEPTH = 50


@dataclass(frozen=True)
class TransformNode:
    """One search step, stored in a flat arena and linked by index."""

    frame: FrameName
    parent: int | None = None
    link: Transform | None = None
    inverted: bool = False
    traversed: frozenset[frozenset[FrameName]] = frozenset()


def build_link_index(
    configuration: Configuration,
    additional_producers: Mapping[FramePair, Producer] | None = None,
) -> dict[FrameName, list[Transform]]:
    """Index the transformations available to a search by frame.

    Entries of additional_producers become dynamic transformations and shadow
    the configuration's transformations for the same unordered pair.

    Raises:
        ArgumentError: If an additional producer has an empty frame or links a
            frame to itself
    """
    links: dict[frozenset[FrameName], Transform] = {}
    for (from_frame, to_frame), producer in (additional_producers or {}).items():
        from_frame, to_frame = frame_name(from_frame), frame_name(to_frame)
        if not from_frame or not to_frame:
            raise ArgumentError(
                f"invalid producer override {from_frame!r} => {to_frame!r}: empty frame name"
            )
        if from_frame == to_frame:
            raise ArgumentError(
                f"invalid producer override: {from_frame} cannot be produced from itself"
            )
        link = DynamicTransform(from_frame, to_frame, producer)
        links[link.frames] = link

    for transform in configuration.each_transform():
        links.setdefault(transform.frames, transform)

    index: dict[FrameName, list[Transform]] = {}
    for link in links.values():
        index.setdefault(link.from_frame, []).append(link)
        index.setdefault(link.to_frame, []).append(link)
    return index


def reachable_frames(
    index: Mapping[FrameName, list[Transform]], start: FrameName
) -> set[FrameName]:
    """Collect the frames connected to start, ignoring link direction."""
    seen = {start}
    pending = [start]
    while pending:
        frame = pending.pop()
        for link in index.get(frame, ()):
            other = link.other_frame(frame)
            if other not in seen:
                seen.add(other)
                pending.append(other)
    return seen


def unwind(arena: list[TransformNode], index: int, from_frame: FrameName) -> TransformationChain:
    """Build the chain ending at arena[index] by walking parent indices."""
    links: list[Transform] = []
    inversions: list[bool] = []
    node = arena[index]
    while node.parent is not None:
        assert node.link is not None
        links.append(node.link)
        inversions.append(node.inverted)
        node = arena[node.parent]
    links.reverse()
    inversions.reverse()
    return TransformationChain(from_frame, arena[index].frame, links, inversions)


class TransformationManager:
    """Resolves transformation chains over a configuration.

    Args:
        conf: Configuration to search. A new empty one is created if omitted.
        checker: Checker used to validate query frames. Defaults to the
            configuration's checker.
        max_seek_depth: Upper bound on the number of links in a chain
        logger: Logger receiving search events
    """

    def __init__(
        self,
        conf: Configuration | None = None,
        checker: ConfigurationChecker | None = None,
        max_seek_depth: int = DEFAULT_MAX_SEEK_DEPTH,
        logger: StructuredLogger | None = None,
    ):
        if max_seek_depth < 1:
            raise ArgumentError(f"max_seek_depth must be at least 1, got {max_seek_depth}")
        self.conf = conf if conf is not None else Configuration()
        self._checker = checker
        self.max_seek_depth = max_seek_depth
        self.logger = logger if logger is not None else get_logger(__name__)

    @property
    def checker(self) -> ConfigurationChecker:
        if self._checker is not None:
            return self._checker
        return self.conf.checker

    @checker.setter
    def checker(self, checker: ConfigurationChecker | None) -> None:
        self._checker = checker

    def transformation_chain(
        self,
        from_frame: object,
        to_frame: object,
        additional_producers: Mapping[FramePair, Producer] | None = None,
    ) -> TransformationChain:
        """Find the shortest chain of transformations from from_frame to to_frame.

        Args:
            from_frame: Source frame
            to_frame: Target frame
            additional_producers: Ad-hoc producers, keyed by (from, to). They
                take priority over the configuration's transformations for the
                same pair of frames.

        Returns:
            The resolved chain. It has no links if from_frame == to_frame.

        Raises:
            InvalidConfiguration: If one of the frames is not declared
            ArgumentError: If an additional producer is invalid
            TransformationNotFound: If no chain exists within the seek depth
        """
        from_frame, to_frame = frame_name(from_frame), frame_name(to_frame)
        frames = self.conf.frames()
        self.checker.check_frame(from_frame, frames)
        self.checker.check_frame(to_frame, frames)

        if from_frame == to_frame:
            return TransformationChain.identity(from_frame)

        index = build_link_index(self.conf, additional_producers)
        if to_frame not in reachable_frames(index, from_frame):
            self.logger.debug(
                "transformation chain not found", {"from": from_frame, "to": to_frame}
            )
            raise TransformationNotFound(from_frame, to_frame)

        link_count = sum(len(links) for links in index.values()) // 2
        max_depth = min(self.max_seek_depth, 2 * link_count + 1)
        self.logger.debug(
            "looking for transformation chain",
            {
                "from": from_frame,
                "to": to_frame,
                "links": link_count,
                "max_depth": max_depth,
                "additional_producers": len(additional_producers or {}),
            },
        )

        arena = [TransformNode(from_frame)]
        frontier = [0]
        for _ in range(max_depth):
            next_frontier = []
            for node_index in frontier:
                node = arena[node_index]
                for link in index.get(node.frame, ()):
                    if link.frames in node.traversed:
                        continue

                    inverted = node.frame == link.to_frame
                    arena.append(
                        TransformNode(
                            frame=link.other_frame(node.frame),
                            parent=node_index,
                            link=link,
                            inverted=inverted,
                            traversed=node.traversed | {link.frames},
                        )
                    )
                    if arena[-1].frame == to_frame:
                        chain = unwind(arena, len(arena) - 1, from_frame)
                        self.logger.debug(
                            "found transformation chain",
                            {"from": from_frame, "to": to_frame, "length": len(chain)},
                        )
                        return chain
                    next_frontier.append(len(arena) - 1)

            if not next_frontier:
                self.logger.debug(
                    "transformation chain not found", {"from": from_frame, "to": to_frame}
                )
                raise TransformationNotFound(from_frame, to_frame)
            frontier = next_frontier

        self.logger.debug(
            "max seek depth reached", {"from": from_frame, "to": to_frame, "max_depth": max_depth}
        )
        raise TransformationNotFound(from_frame, to_frame, "max seek depth reached")


__all__ = [
    "DEFAULT_MAX_SEEK_DEPTH",
    "TransformNode",
    "TransformationManager",
    "build_link_index",
    "reachable_frames",
    "unwind",
]
