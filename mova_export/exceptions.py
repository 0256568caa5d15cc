class MappingError(ValueError):
    """Raised when a column mapping is structurally invalid."""


class ConversionError(ValueError):
    """Base exception for all conversion failures surfaced to the caller."""


class EmptyInputError(ConversionError):
    """Raised when the order export contains no rows."""


class MissingOrderIdColumnError(ConversionError):
    """Raised when the order export has no 'Name' (order id) column."""


class InvalidDateTokenError(ConversionError):
    """Raised when the output date token is missing or malformed."""
