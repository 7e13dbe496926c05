"""
PAS SDK Protocols (Interfaces)

Exception hierarchy and the transport contract consumed by resource objects.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, Type, TypeVar, Union, runtime_checkable


# ============ Exceptions ============

class PlatformError(Exception):
    """Base exception for the PAS SDK"""
    pass


class TransportError(PlatformError):
    """Raised when the HTTP call itself fails"""
    pass


class HttpError(TransportError):
    """Raised when the service answers with a non-200 status"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class EnvelopeDecodeError(PlatformError):
    """Raised when a response body is not a valid response envelope"""
    pass


class EnvelopeError(PlatformError):
    """Raised when the response envelope reports success=false"""

    def __init__(self, message: Optional[str] = None, exception: Optional[str] = None):
        self.message = message or ""
        self.exception = exception or ""
        super().__init__(f"{self.message} {self.exception}".strip())


class CardinalityError(PlatformError):
    """Raised when a lookup expecting exactly one row gets zero or many"""
    pass


class NotFoundError(CardinalityError):
    """Query returned no rows"""

    def __init__(self):
        super().__init__("Query returns 0 object")


class TooManyResultsError(CardinalityError):
    """Query returned more than one row"""

    def __init__(self, count: int):
        super().__init__(f"Query returns too many objects (found {count}, expected 1)")
        self.count = count


class PreconditionError(PlatformError):
    """Raised when an operation is invoked on an object that is not ready for it"""
    pass


class MissingIDError(PreconditionError):
    """Raised when an operation needs an ID that has not been resolved"""

    def __init__(self, object_type: str):
        super().__init__(f"Missing ID for {object_type}")
        self.object_type = object_type


class MissingAttributeError(PreconditionError):
    """Raised when a mandatory attribute is not set"""
    pass


class PermissionValidationError(PlatformError):
    """Raised when a permission entry cannot be resolved"""
    pass


class InvalidPrincipalTypeError(PermissionValidationError):
    """Principal type is neither User nor Role"""

    def __init__(self, principal_type: str):
        super().__init__(f"Invalid PrincipalType {principal_type}")
        self.principal_type = principal_type


class InvalidRightError(PermissionValidationError):
    """Right name is not valid for the resource category"""

    def __init__(self, right: str):
        super().__init__(f"Invalid right {right}")
        self.right = right


class FieldDecodeError(PlatformError):
    """Raised when a response value does not match the target field type"""
    pass


class UnsupportedOperationError(PlatformError):
    """Raised when a resource type does not expose the requested operation"""
    pass


# ============ Transport ============

EnvelopeT = TypeVar("EnvelopeT")


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Interface for the transport used by resource objects.

    Implementations POST ``args`` as JSON to ``method`` and decode the body
    into ``response_model``. Transport and decode failures are raised; the
    envelope's success flag is left to the caller.
    """

    def call(
        self,
        method: str,
        args: Union[Dict[str, Any], List[Dict[str, Any]], None],
        response_model: Type[EnvelopeT],
    ) -> EnvelopeT:
        """Execute one API call"""
        ...


__all__ = [
    "PlatformError",
    "TransportError",
    "HttpError",
    "EnvelopeDecodeError",
    "EnvelopeError",
    "CardinalityError",
    "NotFoundError",
    "TooManyResultsError",
    "PreconditionError",
    "MissingIDError",
    "MissingAttributeError",
    "PermissionValidationError",
    "InvalidPrincipalTypeError",
    "InvalidRightError",
    "FieldDecodeError",
    "UnsupportedOperationError",
    "TransportProtocol",
]
