"""Errors raised by the encoder."""


class BlurHashError(ValueError):
    """Base class for rejected encode requests."""


class InvalidComponentCount(BlurHashError):
    """Component count outside the encodable range."""

    def __init__(self, axis: str, value):
        self.axis = axis
        self.value = value
        super().__init__(f"{axis} component count must be 1-9, got {value!r}")


class InvalidImageDimensions(BlurHashError):
    """Image has no pixels along at least one axis."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Image must be at least 1x1, got {width}x{height}")
