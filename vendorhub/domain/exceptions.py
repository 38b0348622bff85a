"""Domain exceptions for the VendorHub application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns (the cache layer
never raises them). Presentation layer maps them to HTTP responses in
exception handlers.
"""

from typing import Any


class VendorHubException(Exception):
    """Base exception for all VendorHub application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the failure envelope sent to API clients."""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationException(VendorHubException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(VendorHubException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'attribute', 'vendor').
            resource_id: The ID (or other lookup value) that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AlreadyExistsException(VendorHubException):
    """Raised when a create or update would duplicate a unique value."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        """Initialize with the resource type and the conflicting field.

        Args:
            resource_type: Type of resource (e.g. 'brand').
            field: Name of the unique field (e.g. 'name', 'email').
            value: The duplicate value.
        """
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "ALREADY_EXISTS",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class ExternalServiceException(VendorHubException):
    """Raised when a third-party lookup (e.g. IFSC directory) fails or is unreachable."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(message, "EXTERNAL_SERVICE_ERROR", {"service": service})
