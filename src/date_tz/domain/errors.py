class InvalidArgumentError(ValueError):
    """Raised for bad API usage: unknown zones, unsupported units, cross-zone comparisons."""


class DateFormatError(ValueError):
    """Raised when an input string does not match the parse pattern."""
