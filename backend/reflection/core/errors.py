"""Error kinds raised by the repositories.

Each carries a machine-readable ``code`` so the HTTP layer and the sharing
result objects can report the kind without matching on classes.
"""


class ReflectionError(Exception):
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReflectionError):
    """Bad input: empty title, out-of-range week or rating, self-share."""

    code = "validation_error"


class NotFoundError(ReflectionError):
    """Email lookup miss or absent record."""

    code = "not_found"


class ConflictError(ReflectionError):
    """Record already exists for a unique key (duplicate share, profile)."""

    code = "conflict"


class TransportError(ReflectionError):
    """The store operation failed for any reason, including network."""

    code = "transport_error"
