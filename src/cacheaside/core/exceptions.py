"""Exception hierarchy for cacheaside."""


class CacheAsideError(Exception):
    """Base class for all cacheaside errors."""


class ArgumentError(CacheAsideError):
    """Raised when a caller passes an invalid argument.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, message: str, argument: str) -> None:
        super().__init__(message)
        self.argument = argument


class MissingArgumentError(ArgumentError, ValueError):
    """Raised when a mandatory argument is missing or empty."""

    def __init__(self, argument: str) -> None:
        super().__init__(
            f"Missing argument exception: {argument} parameter is mandatory",
            argument,
        )


class TypeArgumentError(ArgumentError, TypeError):
    """Raised when a configuration value has the wrong type."""

    def __init__(self, argument: str, expected: str) -> None:
        super().__init__(
            f"Type argument exception: {argument} parameter must be type {expected}",
            argument,
        )


class UnrecognizedBackendError(CacheAsideError, ValueError):
    """Raised when the requested backend type is not supported."""

    def __init__(self, backend: object) -> None:
        super().__init__(f"Unrecognized type: {backend}")
        self.backend = backend


class BackendError(CacheAsideError):
    """Raised when a backend call fails."""


class BackendConnectionError(BackendError):
    """Raised when the backend connection cannot be established or is lost."""


class SerializationError(CacheAsideError):
    """Raised when serialization or deserialization fails."""


class UnsupportedTypeError(SerializationError, TypeError):
    """Raised when a value's type cannot be encoded."""


class UnrecognizedEncodingError(SerializationError, ValueError):
    """Raised when stored data does not match any known encoding."""
