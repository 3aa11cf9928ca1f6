"""
Restock exceptions.

Range validation errors are raised before any I/O and are user-correctable.
Store failures surface as UpstreamUnavailable (reads) or WriteFailure (ledger
appends); neither is retried here.
"""


class RestockError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class UnknownDateFormat(RestockError, ValueError):
    """A date string matched none of the accepted shapes."""

    def __init__(self, text):
        self.text = text
        super().__init__(
            f"Unrecognised date {text!r}: expected YYYY-MM-DD, MM/DD/YYYY or DD-MM-YYYY"
        )


class RangeValidationError(RestockError):
    """A requested date range was missing, malformed or inverted."""


class MissingFieldError(RangeValidationError):
    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"{field_name} is required.")


class InvalidFormatError(RangeValidationError):
    def __init__(self, field_name: str, text):
        self.field_name = field_name
        self.text = text
        super().__init__(f"{field_name} {text!r} is not a valid date.")


class InvertedRangeError(RangeValidationError):
    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"End date {end} cannot be before the start date {start}.")


class UpstreamUnavailable(RestockError):
    """The relational store could not be reached or the query failed."""


class WriteFailure(RestockError):
    """An approval could not be appended to the history ledger."""


class AccessDenied(RestockError):
    """Login rejected: bad credentials or a market the user may not select."""

    def __init__(self, message: str, bad_credentials: bool = False):
        self.bad_credentials = bad_credentials
        super().__init__(message)


class MalformedFileError(RestockError):
    """An uploaded flat file could not be decoded or parsed into rows."""
