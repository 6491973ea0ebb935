"""Error types raised by the bracket data sources."""


class BracketAPIError(Exception):
    """Base class for every data-source failure"""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url: str | None = url

    def __str__(self) -> str:
        message = super().__str__()
        if self.url:
            return f"{message} ({self.url})"
        return message


class NetworkFailure(BracketAPIError):
    """Connection error or timeout"""


class ApiFailure(BracketAPIError):
    """Non-2xx response that is not a client error"""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message, url)
        self.status: int | None = status


class ParseFailure(BracketAPIError):
    """Malformed JSON or a body that does not match the expected schema"""


class NotFound(BracketAPIError):
    """No usable bracket in the response"""
