"""
Custom exceptions for the celebrations site.

These exceptions are intentionally simple and descriptive.
They are used across:

  - runtime/store/
  - runtime/api/
  - cli/

Every exception carries an HTTP status code so that the single error
handler in runtime/api/server.py can turn any of them into a response
without knowing where it was raised.
"""


class SiteError(Exception):
    """
    Base class for all errors surfaced by the site.

    `status_code` defaults to 500; subclasses override it for expected
    client-side conditions (400, 404).
    """

    status_code = 500

    def __init__(self, message, status_code=None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class StoreIOError(SiteError):
    """
    Raised when a collection file cannot be read or written.

    The underlying OS error (if any) is kept in `cause`.
    """

    def __init__(self, message, path=None, cause=None):
        self.path = path
        self.cause = cause
        super().__init__(message)


class StoreParseError(SiteError):
    """
    Raised when a collection file does not contain a valid JSON array.

    Example:
        '[{"a": 1}]'   ← expected
        '{"a": 1}'     ← raises this exception (not an array)
        '[{"a": 1'     ← raises this exception (not JSON)
    """

    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message)


class ValidationError(SiteError):
    """
    Raised when required fields of a submission are missing or empty.

    The exception contains the list of missing field names, in the order
    they were declared required.
    """

    status_code = 400

    def __init__(self, missing_fields):
        self.missing_fields = list(missing_fields)
        msg = "Missing required fields: " + ", ".join(self.missing_fields)
        super().__init__(msg)


class BadRequestError(SiteError):
    """Raised when a request body cannot be decoded into a record."""

    status_code = 400


class NotFoundError(SiteError):
    """Raised when no route matches a path without a file extension."""

    status_code = 404

    def __init__(self, message="Page Not Found"):
        super().__init__(message)
