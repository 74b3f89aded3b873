"""Custom exceptions used across pagediff."""

__all__ = [
    "PageDiffError",
    "InvalidInput",
    "DimensionMismatch",
    "DecodeFailure",
    "Cancelled",
]


class PageDiffError(Exception):
    """Base class for every error raised by pagediff."""

    pass


class InvalidInput(PageDiffError, ValueError):
    """Raised when an image or a parameter is unusable (e.g. zero width)."""

    pass


class DimensionMismatch(PageDiffError, ValueError):
    """Raised when the old and new rasters do not share width and height."""

    def __init__(self, old_size, new_size):
        self.old_size = tuple(old_size)
        self.new_size = tuple(new_size)
        super().__init__(
            "Image dimensions differ: old is %dx%d, new is %dx%d"
            % (self.old_size + self.new_size)
        )


class DecodeFailure(PageDiffError):
    """Raised when an input file cannot be decoded into a raster."""

    pass


class Cancelled(PageDiffError):
    """Raised when a comparison is cancelled before it finishes."""

    pass
