"""Error taxonomy shared by services and the HTTP layer."""

from typing import Optional


class FitTrackError(Exception):
    """Base exception for domain errors"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FitTrackError):
    """Raised when input is malformed or missing"""
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class Unauthorized(FitTrackError):
    """Raised when credentials are missing or invalid"""
    status_code = 401


class Forbidden(FitTrackError):
    """Raised when the caller is authenticated but not permitted"""
    status_code = 403


class NotFound(FitTrackError):
    """Raised when a referenced entity does not exist"""
    status_code = 404


class Conflict(FitTrackError):
    """Raised on a uniqueness violation that cannot be recovered"""
    status_code = 409
