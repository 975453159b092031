"""Errors raised while resolving challenge participation"""
from typing import Optional


class ChallengeError(Exception):
    """Base exception for challenge analysis errors"""
    pass


class ApiError(ChallengeError):
    """An upstream API answered with a non-success status or an unusable body"""

    def __init__(self, message: str, status: Optional[int] = None, endpoint: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.endpoint = endpoint


class NetworkError(ChallengeError):
    """No response could be obtained from an upstream API"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class InvalidDateRangeError(ChallengeError, ValueError):
    """Date range whose end is not after its start"""
    pass


class InvalidPostUrlError(ChallengeError, ValueError):
    """URL that does not point to a Hive post"""
    pass
