"""Error classes and helpers"""

__all__ = ["LiftError", "RenderError", "ParseError"]


class LiftError(TypeError):
    """Host data has a shape that cannot become a Value."""


class RenderError(TypeError):
    """Value cannot be rendered as text."""


class ParseError(Exception):
    """Exception raised for value literal parsing errors.

    Args:
        message: (str) Error description
        position: (tuple | None) Optional (line, column) where error occurred

    Attributes:
        message: (str) Error description
        position: (tuple | None) (line, column) where error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)
