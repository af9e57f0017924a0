"""
Custom exceptions for AutoSMS Payment Hub operations.
"""


class AutoSMSException(Exception):
    """Base exception for all AutoSMS-related errors."""

    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class ConfigurationError(AutoSMSException):
    """Raised when there's a configuration issue."""
    pass


class TransportError(AutoSMSException):
    """Raised when the connection cannot be established or times out."""
    pass


class HttpStatusError(AutoSMSException):
    """Raised when the API answers with a status code that is not accepted."""

    def __init__(self, status_code, body=''):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"HTTP error {status_code}: {body}",
            error_code=status_code,
            response_data=body
        )


class SignatureError(AutoSMSException):
    """Raised when a response signature cannot be trusted."""
    pass


class SignatureMissingError(SignatureError):
    """Raised when a signed response carries no signature header."""
    pass


class SignatureInvalidError(SignatureError):
    """Raised when the response signature does not match the body."""
    pass


class MalformedResponseError(AutoSMSException):
    """Raised when the API response body is not valid JSON or has unexpected fields."""
    pass


class ValidationError(AutoSMSException):
    """Raised when caller-supplied data is invalid."""
    pass
