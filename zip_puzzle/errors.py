class ZipPuzzleError(Exception):
    """Base class for errors raised by the puzzle engine."""


class MalformedLevel(ZipPuzzleError, ValueError):
    """A level description has inconsistent dimensions or invalid numbering."""


class InvalidArgument(ZipPuzzleError, ValueError):
    """A query received out-of-bounds or non-adjacent cells."""
