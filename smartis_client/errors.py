"""Exceptions raised by the Smartis client."""


class SmartisError(Exception):
    """Base exception for all Smartis client errors."""

    pass


class ResponseError(SmartisError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ResponseError):
    """Raised on HTTP 401. The response body is not inspected."""

    def __init__(self):
        super().__init__("unauthorized", 401)


class InternalServerError(ResponseError):
    """Raised on HTTP 500. The response body is not inspected."""

    def __init__(self):
        super().__init__("internal error", 500)


class APIError(ResponseError):
    """Raised when the API reports an error as ``{"error": "<message>"}``."""

    pass


class UnknownStatusError(ResponseError):
    """Raised for a non-2xx status whose body carries no readable error."""

    def __init__(self, status_code: int):
        super().__init__(f"unknown error: {status_code}", status_code)


class MalformedResponseError(SmartisError):
    """Raised when a response body cannot be decoded into the expected shape."""

    pass


class MalformedReportError(MalformedResponseError):
    """Raised when report data has an unexpected structure."""

    pass


class NoDataError(SmartisError):
    """Raised when the API returns no report data at all."""

    def __init__(self, message: str = "no reports data"):
        super().__init__(message)


class MissingCredentialError(SmartisError):
    """Raised when a CRM lookup is attempted without a CRM token."""

    def __init__(self, message: str = "crm token is empty"):
        super().__init__(message)
