"""
Error types raised while rendering a document.

Every failure on the conversion path derives from RenderServiceError so the
HTTP layer can catch one type and turn it into an opaque 500 response.
"""


class RenderServiceError(Exception):
    """Base class for conversion failures."""


class RenderFailure(RenderServiceError):
    """The rendering tool exited non-zero or could not be started."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class ArtifactIOFailure(RenderServiceError):
    """A temporary render file could not be written or read back."""
