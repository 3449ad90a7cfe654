# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Custom exceptions for flowengine.

All exceptions inherit from FlowEngineError for consistent error handling.
"""

from typing import Optional


class FlowEngineError(Exception):
    """Base exception for all flowengine errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[dict] = None
    ):
        """
        Initialize flowengine error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(FlowEngineError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str, details: Optional[dict] = None):
        """
        Initialize not found error.

        Args:
            resource: Type of resource (e.g., "Workflow", "Execution")
            identifier: Resource identifier
            details: Additional error details
        """
        message = f"{resource} not found: {identifier}"
        super().__init__(message, status_code=404, details=details)
        self.resource = resource
        self.identifier = identifier


class ValidationError(FlowEngineError):
    """Validation failed."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, status_code=400, details=details)
        self.field = field


class ConfigurationError(FlowEngineError):
    """Configuration error."""

    def __init__(self, message: str, config_file: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, status_code=500, details=details)
        self.config_file = config_file


class PersistenceError(FlowEngineError):
    """Persistence store rejected or failed a read/write."""

    def __init__(self, message: str, operation: Optional[str] = None, details: Optional[dict] = None):
        """
        Initialize persistence error.

        Args:
            message: Store error message
            operation: Gateway operation that failed
            details: Additional error details
        """
        super().__init__(message, status_code=502, details=details)
        self.operation = operation


# Error Message Utilities

def sanitize_error_for_user(error: Exception, include_type: bool = True) -> str:
    """
    Sanitize error messages for user display.

    Args:
        error: The exception to sanitize
        include_type: Whether to include exception type

    Returns:
        User-friendly error message without stack trace
    """
    error_msg = str(error).strip()

    if len(error_msg) > 500:
        error_msg = error_msg[:500] + "..."

    if include_type:
        return f"{error.__class__.__name__}: {error_msg}"

    return error_msg
