from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for application errors."""

    error_code: str = "APP_ERROR"

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(AppError):
    error_code = "CONFIG_ERROR"


class ValidationError(AppError):
    error_code = "VALIDATION_ERROR"


class AtomicworkAPIError(AppError):
    """Non-success HTTP response from the Atomicwork API."""

    error_code = "API_ERROR"

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Atomicwork API error ({status_code}): {body}", details=body)


class AtomicworkConnectionError(AppError):
    """Transport level failure talking to the Atomicwork API."""

    error_code = "CONNECTION_ERROR"

    def __init__(self, message: str):
        super().__init__(f"Failed to connect to Atomicwork: {message}", details=message)
