"""Wren exception hierarchy.

Validation failures are never raised — they are returned as data on
``ValidationResult.errors``. These exceptions cover programmer errors:
malformed schemas, bad options, missing optional dependencies.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when validator options or the environment are invalid.

    Typically raised before any input is looked at, e.g. a negative
    ``array_limit`` or multipart parsing without ``python-multipart``.
    """


class SchemaError(ConfigurationError):
    """Raised when a schema description cannot be normalized.

    Carries the offending key so the message points at the culprit::

        SchemaError("tags", "array type must wrap exactly one element type")
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid schema for {key!r}: {reason}")
