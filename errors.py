class TableEditorError(Exception):
    """Base exception for table editor errors."""


class TransportError(TableEditorError):
    """Raised when fetching or persisting a table fails."""


class PersistRejected(TransportError):
    """Raised when the store answers a persist request with a non-success status."""

    def __init__(self, message, status=None, request_body=None, response_body=None):
        super().__init__(message)
        self.status = status
        self.request_body = request_body
        self.response_body = response_body


class StateInvariantViolation(TableEditorError):
    """Raised when headers, editable headers, errors and rows fall out of step."""
