"""Domain-specific exceptions for POS slot reporting.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from SlotsError for easy catching.

Row-level problems (a bad Amount, an unparseable Date, ...) are never raised;
they are counted by the validator. Only structural problems surface here.
"""


class SlotsError(Exception):
    """Base exception for all POS slot reporting errors.

    Users can catch this exception to handle any error raised by the package.
    """

    pass


class ConfigError(SlotsError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Excluded/closed hours fall outside 0-23
    - A closed-hours file cannot be loaded or parsed
    - A filter bound (date range, page size) is invalid
    """

    pass


class DataQualityError(SlotsError):
    """Raised when input data is unusable as a whole."""

    pass


class InvalidInputError(DataQualityError):
    """Raised when the raw input is not a sequence of records.

    Individual malformed rows are rejected silently; this error is reserved
    for inputs such as a bare string, a mapping or None.
    """

    pass


class LoadError(SlotsError):
    """Raised when the raw source cannot be fetched or parsed.

    This exception is raised when:
    - A file is missing or unreadable
    - A URL returns a non-success status or invalid JSON
    - A spreadsheet lacks one of the required columns
    """

    pass
