"""Error types raised by the URL shortener core."""


class ShortenerError(Exception):
    """Base class for URL shortener errors.

    Each subclass carries the HTTP status the web layer answers with and the
    status phrase used as the ``error`` field of the response body.
    """

    status_code = 500
    phrase = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShortenerError):
    """Bad URL or non-positive validity."""

    status_code = 400
    phrase = "Bad Request"


class ConflictError(ShortenerError):
    """Custom short code already taken.

    Answered with 400 rather than 409 to stay compatible with existing clients.
    """

    status_code = 400
    phrase = "Bad Request"


class NotFoundError(ShortenerError):
    """Unknown short code."""

    status_code = 404
    phrase = "Not Found"


class GoneError(ShortenerError):
    """Short code exists but is expired or deactivated."""

    status_code = 410
    phrase = "Gone"


class CodeGenerationError(ShortenerError):
    """No free short code could be drawn."""
