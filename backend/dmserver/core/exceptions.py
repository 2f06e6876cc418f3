"""Custom exceptions for the dmserver application."""

from __future__ import annotations


class DMServerError(Exception):
    """Base exception for dmserver."""

    pass


class HashDecodeError(DMServerError):
    """Raised when an encoded password hash cannot be decoded."""

    pass


class FieldCountError(HashDecodeError):
    """Raised when an encoded hash has the wrong number of `$` fields."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"invalid number of fields: expected {expected}, got {actual}")


class IncompatibleAlgorithmError(HashDecodeError):
    """Raised when the algorithm id or argon2 version does not match."""

    def __init__(self, message: str = "incompatible argon2 version") -> None:
        super().__init__(message)


class MalformedPrefixError(IncompatibleAlgorithmError):
    """Raised when there is text before the first `$` of an encoded hash."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(f"malformed hash prefix: {prefix!r}")


class MalformedFieldError(HashDecodeError):
    """Raised when a numeric field does not match its expected pattern."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"malformed {field} field: {value!r}")


class InvalidEncodingError(HashDecodeError):
    """Raised when the salt or key field is not valid unpadded base64."""

    def __init__(self, field: str, position: int) -> None:
        self.field = field
        self.position = position
        super().__init__(f"illegal base64 data in {field} at input byte {position}")


class RandomSourceError(DMServerError):
    """Raised when the secure random source returns fewer bytes than requested."""

    def __init__(self, requested: int, received: int) -> None:
        self.requested = requested
        self.received = received
        super().__init__(f"random salt was not long enough: wanted {requested} bytes, got {received}")


class IdentifierExistsError(DMServerError):
    """Raised when a username or email is already registered."""

    def __init__(self, identifier: str, identifier_type: str) -> None:
        self.identifier = identifier
        self.identifier_type = identifier_type
        super().__init__(f"{identifier_type} '{identifier}' already exists")
