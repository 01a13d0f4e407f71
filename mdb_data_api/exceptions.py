"""
Custom exceptions for MDB_DATA_API.

These exceptions provide specific error types for the Data API client while
remaining compatible with RuntimeError.
"""

from typing import Any, Dict, List, Optional


class DataAPIError(RuntimeError):
    """
    Base exception for Data API client errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (action,
                 collection, status_code, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ConfigurationError(DataAPIError):
    """
    Raised when client configuration is invalid or missing.

    This exception is raised synchronously while building a client, before
    any request can be issued: empty API key, both or neither endpoint
    shapes, or an unknown region.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the configuration error.

        Args:
            message: Error message
            config_key: Configuration key that caused the error (if available)
            context: Additional context information
        """
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        super().__init__(message, context=context)
        self.config_key = config_key


class InvalidParamsError(DataAPIError):
    """
    Raised when an action is missing dataSource, database or collection.

    No network call has been made when this is raised.

    Attributes:
        message: Error message
        action: Server action that was requested
        missing: Names of the required parameters that were missing or empty
    """

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        missing: Optional[List[str]] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if action:
            context["action"] = action
        if missing:
            context["missing"] = missing
        super().__init__(message, context=context)
        self.action = action
        self.missing = missing or []


class DataAPIRequestError(DataAPIError):
    """
    Raised when the transport or the Data API reports a failure.

    The `error` attribute is a JSON-serializable description of the failed
    request with the API key already masked, so it is safe to log.

    Attributes:
        message: Error message
        action: Server action that was requested
        status_code: HTTP status of the response, None for transport failures
        error: Redacted error payload
    """

    def __init__(
        self,
        message: str,
        error: Dict[str, Any],
        action: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if action:
            context["action"] = action
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, context=context)
        self.error = error
        self.action = action
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Return the redacted error payload."""
        return self.error
