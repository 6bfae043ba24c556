"""Error definitions for shapes and shape collections."""


class InvalidArgumentError(ValueError):
    """Raised when a shape collection is constructed from unusable input.

    Covers an empty member sequence or one without stable positional access.
    """


class InvalidShapeError(ValueError):
    """Raised when a shape cannot be built from the given coordinates or geometry."""
