"""
Validation errors raised by tsquery value objects.

Every error is a ``ValueError`` so callers that only care about "bad input"
can catch the built-in type, while the composing query object can branch on
the concrete kind.
"""


class QueryValidationError(ValueError):
    """Base class for all query component validation failures."""


class MissingFieldError(QueryValidationError):
    """Raised when a required field is null or empty."""

    def __init__(self, field: str, message: str = ""):
        self.field = field
        super().__init__(message or f"Missing or empty {field}")


class InvalidSyntaxError(QueryValidationError):
    """Raised when a field does not match its expected grammar."""


class InvalidIdError(InvalidSyntaxError):
    """Raised when an identifier contains an illegal character."""


class InvalidDurationError(InvalidSyntaxError):
    """Raised when a duration string cannot be parsed."""


class UnknownAggregatorError(QueryValidationError):
    """Raised when an aggregator name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid aggregator: '{name}'")


class UnknownFilterTypeError(QueryValidationError):
    """Raised when a tag-value filter type is not registered."""

    def __init__(self, filter_type: str):
        self.filter_type = filter_type
        super().__init__(f"Unknown tag filter type: '{filter_type}'")
