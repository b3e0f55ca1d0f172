from snowflake.connector.errors import Error as TransportError


class SnowmonitorError(Exception):
    """Base class for errors raised by snowmonitor itself."""


class ValidationError(SnowmonitorError):
    """Options failed validation; nothing was sent to Snowflake."""


class InvalidObjectIdentifierError(ValidationError):
    def __init__(self, identifier: object = None) -> None:
        super().__init__(f"invalid object identifier: {identifier!r}")
        self.identifier = identifier


class RenderError(SnowmonitorError):
    """An options object could not be rendered to SQL."""


class DecodeError(SnowmonitorError):
    """A result row could not be decoded."""


class InvalidEnumError(DecodeError):
    def __init__(self, kind: str, value: str) -> None:
        super().__init__(f"invalid {kind} type: {value}")
        self.kind = kind
        self.value = value


class NotFoundError(SnowmonitorError):
    """The object does not exist or the current role is not authorized."""


__all__ = [
    "DecodeError",
    "InvalidEnumError",
    "InvalidObjectIdentifierError",
    "NotFoundError",
    "RenderError",
    "SnowmonitorError",
    "TransportError",
    "ValidationError",
]
