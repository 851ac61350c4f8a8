"""Exception types raised by the document pipeline."""


class BizDocError(Exception):
    """Base class for all document generation errors."""


class FormatError(BizDocError, ValueError):
    """A money value could not be formatted (NaN or infinite)."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Cannot format non-finite amount: {value!r}")


class ImageLoadError(BizDocError):
    """An image could not be read or decoded."""


class DocumentGenerationError(BizDocError):
    """User-facing failure wrapping the underlying cause."""

    def __init__(self, message: str = "Failed to generate PDF"):
        super().__init__(message)
