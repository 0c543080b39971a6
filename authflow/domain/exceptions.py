"""Domain exceptions for the sub-flow manager.

One base class carries message, error_code and details so the API layer can
map every failure to an HTTP response the same way. Multi-step operations
annotate the exception they propagate (operation, step, subflow_id) instead
of wrapping it, so callers can still catch by kind.
"""

from typing import Any


class AuthflowException(Exception):
    """Base exception for all authflow errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. realm_id, step, subflow_id).
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

    @property
    def operation(self) -> str | None:
        """Sub-flow operation that was running when the error was raised, if annotated."""
        return self.details.get("operation")

    @property
    def step(self) -> str | None:
        """Step of a multi-call operation that failed, if annotated."""
        return self.details.get("step")

    def annotate(self, **context: Any) -> "AuthflowException":
        """Attach context keys not already present. Innermost annotation wins."""
        for key, value in context.items():
            if value is not None:
                self.details.setdefault(key, value)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable error body."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AuthflowException):
    """Raised when input validation fails (e.g. missing alias or realm)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundException(AuthflowException):
    """Raised when a remote resource does not exist (HTTP 404)."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'flow', 'execution').
            resource_id: The id or path that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ExecutionNotFoundException(NotFoundException):
    """Raised when no execution in the parent flow references the sub-flow."""

    def __init__(self, realm_id: str, parent_flow_alias: str, subflow_id: str) -> None:
        """Initialize with the scope that was scanned.

        Args:
            realm_id: Realm of the parent flow.
            parent_flow_alias: Alias of the parent flow whose executions were listed.
            subflow_id: Flow id no execution pointed at.
        """
        super().__init__("execution", subflow_id)
        self.message = (
            f"No execution in flow '{parent_flow_alias}' (realm {realm_id}) "
            f"references sub-flow {subflow_id}"
        )
        self.args = (self.message,)
        self.error_code = "EXECUTION_NOT_FOUND"
        self.details.update(
            {
                "realm_id": realm_id,
                "parent_flow_alias": parent_flow_alias,
                "subflow_id": subflow_id,
            }
        )


class RemoteError(AuthflowException):
    """Raised when Keycloak answers with a non-2xx status other than 404."""

    def __init__(self, status_code: int, message: str, path: str | None = None) -> None:
        """Initialize with HTTP status and server message.

        Args:
            status_code: HTTP status returned by Keycloak.
            message: Error text from the response body (or reason phrase).
            path: Request path, when known.
        """
        details: dict[str, Any] = {"status_code": status_code}
        if path:
            details["path"] = path
        super().__init__(
            f"Keycloak returned {status_code}: {message}",
            "REMOTE_ERROR",
            details,
        )
        self.status_code = status_code


class RemoteUnavailableException(AuthflowException):
    """Raised on transport-level failure (connect error, timeout, TLS)."""

    def __init__(self, reason: str, path: str | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if path:
            details["path"] = path
        super().__init__("Keycloak is unavailable", "REMOTE_UNAVAILABLE", details)
