"""
Exception hierarchy for nativepack.

Defines all exception types with error codes, transient flags, and correlation IDs.
Every invariant violation surfaces as one of these; nothing is defaulted away.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import uuid
from typing import Any, Dict, Optional


class NativepackError(Exception):
    """
    Base exception for all nativepack errors.

    All nativepack exceptions inherit from this class. Provides standard
    error attributes: message, error_code, details, correlation_id.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "CFG_001")
        details: Additional context (dict)
        correlation_id: UUID for tracing across build stages
        original_exception: Wrapped exception (if any)
        is_transient: Whether error is transient (retryable)

    Example:
        raise NativepackError(
            message="Build step failed",
            error_code="ERR_UNKNOWN",
            details={"chunk": "main"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize NativepackError.

        Args:
            message: Error message
            error_code: Error code for programmatic handling
            details: Additional context dict
            correlation_id: UUID for build tracing
            original_exception: Original wrapped exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception
        self.is_transient = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


class ValidationError(NativepackError):
    """
    Raised when input validation fails.

    Error Codes:
        VAL_001: Missing required field
        VAL_002: Invalid field type
        VAL_003: Unsupported rule value

    Not transient.
    """

    def __init__(self, message: str, error_code: str = "VAL_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class ConfigurationError(NativepackError):
    """
    Raised when plugin configuration or build invocation is unusable.

    Error Codes:
        CFG_001: Missing platform
        CFG_002: Missing bundle output path
        CFG_003: Cannot infer compilation output path
        CFG_004: Malformed invocation descriptor
        CFG_005: Invalid plugin configuration
        CFG_006: Build stages ran out of order

    Fatal, never retried.
    """

    def __init__(self, message: str, error_code: str = "CFG_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class EntryResolutionError(ConfigurationError):
    """
    Raised when the entry chunk cannot be inferred.

    Error Codes:
        ENTRY_001: No initial chunk group
        ENTRY_002: No chunk matching the entry name
    """

    def __init__(self, message: str, error_code: str = "ENTRY_002", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class GraphError(NativepackError):
    """
    Raised when a chunk graph is malformed.

    Error Codes:
        GRAPH_001: Duplicate chunk identity
        GRAPH_002: Reference to unknown chunk
        GRAPH_003: Malformed graph description
    """

    def __init__(self, message: str, error_code: str = "GRAPH_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class ManifestError(NativepackError):
    """
    Raised when the runtime manifest cannot be injected.

    Error Codes:
        MANIFEST_001: Entry chunk has no output files
        MANIFEST_002: Entry asset missing from asset store
    """

    def __init__(self, message: str, error_code: str = "MANIFEST_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class DistributionError(NativepackError):
    """
    Raised when copying artifacts to their destinations fails.

    Error Codes:
        DIST_001: One or more copies failed (missing sources included)

    Not retried by the core; the build step fails.
    """

    def __init__(self, message: str, error_code: str = "DIST_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False
