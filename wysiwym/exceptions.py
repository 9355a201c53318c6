"""
Custom Exception Classes for the WYSIWYM doc model

This module defines the exceptions raised while registering kinds and while
converting between doc-model trees and editor trees. Every conversion error
carries the offending kind (or editor type name) in ``details`` so the
failure can be diagnosed without a debugger.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorCode(str, Enum):
    """Machine-readable error codes, surfaced in HTTP error responses."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    REGISTRY_INCONSISTENT = "REGISTRY_INCONSISTENT"
    REGISTRY_AMBIGUOUS_KIND = "REGISTRY_AMBIGUOUS_KIND"
    REGISTRY_CONFLICT = "REGISTRY_CONFLICT"
    REGISTRY_FROZEN = "REGISTRY_FROZEN"

    CONVERSION_UNKNOWN_KIND = "CONVERSION_UNKNOWN_KIND"
    CONVERSION_EMPTY_PRODUCTION = "CONVERSION_EMPTY_PRODUCTION"
    CONVERSION_MISSING_OUTPUT = "CONVERSION_MISSING_OUTPUT"
    CONVERSION_UNSUPPORTED_FLOW = "CONVERSION_UNSUPPORTED_FLOW"
    CONVERSION_FLOW_VIOLATION = "CONVERSION_FLOW_VIOLATION"
    CONVERSION_STRUCTURAL_REJECTION = "CONVERSION_STRUCTURAL_REJECTION"

    MARKDOWN_UNSUPPORTED = "MARKDOWN_UNSUPPORTED"


class WysiwymError(Exception):
    """Base exception class for all doc-model related exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Registry Exceptions
# ============================================================================


class RegistryError(WysiwymError):
    """Raised when the kind registry is misconfigured"""

    def __init__(self, message: str, kind: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if kind is not None:
            error_details["kind"] = kind
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=error_details)


class RegistrationConflictError(RegistryError):
    """Raised when a plugin fragment reuses an intrinsic kind name"""

    error_code = ErrorCode.REGISTRY_CONFLICT

    def __init__(self, kind: str):
        super().__init__(message=f"Kind '{kind}' is intrinsic and cannot be registered by a plugin", kind=kind)


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry that has been frozen"""

    error_code = ErrorCode.REGISTRY_FROZEN

    def __init__(self, kind: str):
        super().__init__(message=f"Cannot register kind '{kind}': registry is frozen", kind=kind)


# ============================================================================
# Conversion Exceptions
# ============================================================================


class ConversionError(WysiwymError):
    """Base class for errors that abort a tree conversion"""

    def __init__(self, message: str, kind: str | None = None, details: dict[str, Any] | None = None):
        error_details = details or {}
        if kind is not None:
            error_details["kind"] = kind
        self.kind = kind
        super().__init__(message=message, status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, details=error_details)


class RegistrationInconsistencyError(ConversionError):
    """Raised when a kind is only partially registered"""

    error_code = ErrorCode.REGISTRY_INCONSISTENT

    def __init__(self, kind: str, reason: str):
        super().__init__(
            message=f"Inconsistent registration for kind '{kind}': {reason}",
            kind=kind,
            details={"reason": reason},
        )
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AmbiguousKindError(ConversionError):
    """Raised when a kind is registered both as a node and as a mark"""

    error_code = ErrorCode.REGISTRY_AMBIGUOUS_KIND

    def __init__(self, kind: str):
        super().__init__(message=f"Kind '{kind}' is registered both as a node and as a mark", kind=kind)
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnknownKindError(ConversionError):
    """Raised when a doc kind or editor type name has no registry entry"""

    error_code = ErrorCode.CONVERSION_UNKNOWN_KIND

    def __init__(self, kind: str, direction: str = "to_editor"):
        if direction == "to_editor":
            message = f"No editor mapping for doc-model kind '{kind}'"
        elif direction == "markdown":
            message = f"No Markdown emitter for doc-model kind '{kind}'"
        else:
            message = f"No doc-model mapping for editor type '{kind}'"
        super().__init__(message=message, kind=kind, details={"direction": direction})


class EmptyProductionError(ConversionError):
    """Raised when a block or marked subtree produces no output nodes"""

    error_code = ErrorCode.CONVERSION_EMPTY_PRODUCTION

    def __init__(self, kind: str):
        super().__init__(message=f"Kind '{kind}' produced no children", kind=kind)


class MissingConverterOutputError(ConversionError):
    """Raised when a registered converter returns nothing"""

    error_code = ErrorCode.CONVERSION_MISSING_OUTPUT

    def __init__(self, kind: str):
        super().__init__(message=f"Converter for kind '{kind}' returned no node", kind=kind)


class UnsupportedFlowError(ConversionError):
    """Raised when a block kind declares a children flow the builder does not know"""

    error_code = ErrorCode.CONVERSION_UNSUPPORTED_FLOW

    def __init__(self, kind: str, flow: Any):
        super().__init__(
            message=f"Unsupported children flow {flow!r} for kind '{kind}'",
            kind=kind,
            details={"flow": repr(flow)},
        )


class FlowViolationError(ConversionError):
    """Raised when a kind appears where its category cannot be placed"""

    error_code = ErrorCode.CONVERSION_FLOW_VIOLATION

    def __init__(self, kind: str, position: str):
        super().__init__(
            message=f"Kind '{kind}' cannot appear at {position} position",
            kind=kind,
            details={"position": position},
        )


class StructuralRejectionError(ConversionError):
    """Raised when the editing surface rejects an assembled tree"""

    error_code = ErrorCode.CONVERSION_STRUCTURAL_REJECTION

    def __init__(self, message: str, kind: str | None = None):
        super().__init__(message=f"Editor tree rejected: {message}", kind=kind)


class UnsupportedMarkdownError(ConversionError):
    """Raised when a Markdown element has no importer and nothing inside it to keep"""

    error_code = ErrorCode.MARKDOWN_UNSUPPORTED

    def __init__(self, element: str):
        super().__init__(
            message=f"Markdown element '{element}' has no importer and no content",
            details={"element": element},
        )
