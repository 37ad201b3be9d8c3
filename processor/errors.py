"""Client-facing errors."""


class InvalidRequestError(ValueError):
    """Raised when request parameters fail validation."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
