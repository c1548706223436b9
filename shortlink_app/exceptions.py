"""
Error taxonomy for the link shortener.

Each error maps to exactly one HTTP status (see shortlink_app.api.errors):

- InvalidInputError        -> 400
- LinkNotFoundError        -> 404
- DuplicateCodeError       -> 409
- GenerationExhaustedError -> 500 (retryable)
- StorageError             -> 500 (details never reach the client)
"""


class LinkError(Exception):
    """Base class for every expected link shortener failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(LinkError):
    """Malformed target URL or custom code."""


class DuplicateCodeError(LinkError):
    """The code is already taken by a live link."""

    def __init__(self, code: str):
        super().__init__("Code already exists")
        self.code = code


class LinkNotFoundError(LinkError):
    """No live link has this code."""

    def __init__(self, code: str):
        super().__init__("Link not found")
        self.code = code


class GenerationExhaustedError(LinkError):
    """Every candidate code collided with an existing link."""

    def __init__(self, attempts: int):
        super().__init__("Failed to generate unique code. Please try again.")
        self.attempts = attempts


class StorageError(LinkError):
    """Any lower-level persistence failure, timeouts included."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
