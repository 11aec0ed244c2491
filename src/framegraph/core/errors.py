"""Custom exception types for frame graph configuration and resolution."""


class FrameGraphError(Exception):
    """Base exception for all frame graph errors."""

    pass


class InvalidConfiguration(FrameGraphError):
    """Invalid frame names, unknown frames or invalid transformation endpoints."""

    pass


class ArgumentError(FrameGraphError, ValueError):
    """Malformed call to the registration or query API."""

    pass


class TransformationNotFound(FrameGraphError):
    """No transformation chain connects the two requested frames."""

    def __init__(self, from_frame: str, to_frame: str, reason: str = "no path"):
        self.from_frame = from_frame
        self.to_frame = to_frame
        self.reason = reason
        super().__init__(
            f"no transformation from '{from_frame}' to '{to_frame}' available ({reason})"
        )


__all__ = [
    "FrameGraphError",
    "InvalidConfiguration",
    "ArgumentError",
    "TransformationNotFound",
]
