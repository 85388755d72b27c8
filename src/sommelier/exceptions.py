class SommelierError(Exception):
    """Base exception for errors surfaced to API callers.

    Attributes:
        status_code: HTTP status the error maps to.
        message: Public message returned in the response body.
    """

    status_code = 500
    default_message = "Something went wrong on the server."

    def __init__(self, message: str = None):
        """Construct a SommelierError.

        Args:
            message: Public message; defaults to the class message
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingQuestionError(SommelierError):
    """Raised when a question request has no usable question text."""

    status_code = 400
    default_message = "userQuestion is required"


class InvalidRequestError(SommelierError):
    """Raised when a request body cannot be read at all."""

    status_code = 400
    default_message = "Invalid request body"


class WineNotFoundError(SommelierError):
    """Raised when a direct lookup does not match any catalog entry."""

    status_code = 404
    default_message = "Wine not found"


class UpstreamError(SommelierError):
    """Raised for any failure of the remote text-generation call.

    The public message stays generic; ``detail`` is for logs only.
    """

    def __init__(self, detail: str = "upstream failure"):
        self.detail = detail
        super().__init__()
