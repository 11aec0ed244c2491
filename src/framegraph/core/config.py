"""Declarative frame graph documents and their I/O.

Pydantic models for frames and transformations with YAML/JSON I/O. A loaded
document is replayed through the Configuration registration API, so files
are validated exactly like programmatic registrations. Quaternions are
scalar-last ``(x, y, z, w)``.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .checker import ConfigurationChecker
from .configuration import Configuration
from .frames import GeometricTransform
from .logging import StructuredLogger
from .manager import DEFAULT_MAX_SEEK_DEPTH


class TransformEntry(BaseModel):
    """Endpoints shared by all transformation entries."""

    model_config = ConfigDict(populate_by_name=True)

    from_frame: str = Field(alias="from", description="Source frame")
    to_frame: str = Field(alias="to", description="Target frame")

    @model_validator(mode="after")
    def validate_endpoints(self) -> TransformEntry:
        """Reject empty names and self-loops early, with the file context."""
        if not self.from_frame or not self.to_frame:
            raise ValueError("Transformation endpoints cannot be empty")
        if self.from_frame == self.to_frame:
            raise ValueError(f"Transformation from {self.from_frame} to itself")
        return self


class StaticTransformEntry(TransformEntry):
    """A static (or example) transformation with optional geometry."""

    translation: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="Translation (x, y, z)"
    )
    rotation: tuple[float, float, float, float] = Field(
        default=(0.0, 0.0, 0.0, 1.0), description="Rotation quaternion (x, y, z, w)"
    )

    @field_validator("rotation")
    @classmethod
    def validate_rotation(
        cls, v: tuple[float, float, float, float]
    ) -> tuple[float, float, float, float]:
        """Validate the quaternion can be normalized."""
        if not any(v):
            raise ValueError("Rotation quaternion cannot be zero")
        return v


class DynamicTransformEntry(TransformEntry):
    """A transformation produced at runtime."""

    producer: str = Field(description="Name of the producer")

    @field_validator("producer")
    @classmethod
    def validate_producer(cls, v: str) -> str:
        if not v:
            raise ValueError("Producer cannot be empty")
        return v


class FrameGraphDocument(BaseModel):
    """Complete frame graph declaration."""

    max_seek_depth: int = Field(
        default=DEFAULT_MAX_SEEK_DEPTH, ge=1, description="Maximum chain length searched"
    )
    frames: list[str] = Field(default_factory=list, description="Declared frames")
    static_transforms: list[StaticTransformEntry] = Field(default_factory=list)
    dynamic_transforms: list[DynamicTransformEntry] = Field(default_factory=list)
    example_transforms: list[StaticTransformEntry] = Field(default_factory=list)


def load_document(path: str | Path) -> FrameGraphDocument:
    """Load a frame graph document from YAML or JSON file.

    Args:
        path: Path to document file

    Returns:
        Validated document

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Frame graph file not found: {path}")

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            # Try YAML first, then JSON
            content = f.read()
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Frame graph file must contain a mapping, got {type(data).__name__}: {path}"
        )

    return FrameGraphDocument(**data)


def build_configuration(
    document: FrameGraphDocument,
    checker: ConfigurationChecker | None = None,
    logger: StructuredLogger | None = None,
) -> Configuration:
    """Replay a document through the registration API."""
    conf = Configuration(checker=checker, logger=logger)
    conf.frames(*document.frames)
    for entry in document.static_transforms:
        conf.static_transform(
            entry.translation, entry.rotation, {entry.from_frame: entry.to_frame}
        )
    for dyn in document.dynamic_transforms:
        conf.dynamic_transform(dyn.producer, {dyn.from_frame: dyn.to_frame})
    for entry in document.example_transforms:
        conf.example_transform(
            entry.translation, entry.rotation, {entry.from_frame: entry.to_frame}
        )
    return conf


def load_configuration(
    path: str | Path,
    checker: ConfigurationChecker | None = None,
    logger: StructuredLogger | None = None,
) -> Configuration:
    """Load a document and build the corresponding configuration."""
    return build_configuration(load_document(path), checker=checker, logger=logger)


def _geometric_entry(transform: GeometricTransform) -> StaticTransformEntry:
    x, y, z = (float(v) for v in transform.translation)
    return StaticTransformEntry(
        from_frame=transform.from_frame,
        to_frame=transform.to_frame,
        translation=(x, y, z),
        rotation=transform.quaternion,
    )


def document_from_configuration(
    conf: Configuration, max_seek_depth: int = DEFAULT_MAX_SEEK_DEPTH
) -> FrameGraphDocument:
    """Describe a configuration as a document. Producers are written with str()."""
    return FrameGraphDocument(
        max_seek_depth=max_seek_depth,
        frames=sorted(conf.frames()),
        static_transforms=[_geometric_entry(t) for t in conf.each_static_transform()],
        dynamic_transforms=[
            DynamicTransformEntry(from_frame=t.from_frame, to_frame=t.to_frame, producer=str(t.producer))
            for t in conf.each_dynamic_transform()
        ],
        example_transforms=[_geometric_entry(t) for t in conf.each_example_transform()],
    )


def save_document(document: FrameGraphDocument, path: str | Path) -> None:
    """Save a document to YAML or JSON file.

    Args:
        document: Document to save
        path: Output file path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = document.model_dump(mode="json", by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() in [".yaml", ".yml"]:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def save_configuration(
    conf: Configuration, path: str | Path, max_seek_depth: int = DEFAULT_MAX_SEEK_DEPTH
) -> None:
    save_document(document_from_configuration(conf, max_seek_depth), path)


__all__ = [
    "TransformEntry",
    "StaticTransformEntry",
    "DynamicTransformEntry",
    "FrameGraphDocument",
    "load_document",
    "build_configuration",
    "load_configuration",
    "document_from_configuration",
    "save_document",
    "save_configuration",
]
