"""
PAS SDK

Client-side data access for the privileged access service API.

Usage:
    from pas_sdk import create_rest_client
    from pas_sdk.platform import Secret

    with create_rest_client() as client:
        secret = Secret(client, secret_name="db password", parent_path="folder1\\folder2")
        print(secret.checkout_secret())
"""

from .factory import create_rest_client
from .logger import setup_sdk_logger
from .protocols import (
    CardinalityError,
    EnvelopeDecodeError,
    EnvelopeError,
    FieldDecodeError,
    HttpError,
    InvalidPrincipalTypeError,
    InvalidRightError,
    MissingAttributeError,
    MissingIDError,
    NotFoundError,
    PermissionValidationError,
    PlatformError,
    PreconditionError,
    TooManyResultsError,
    TransportError,
    TransportProtocol,
    UnsupportedOperationError,
)
from .restapi import (
    BaseAPIResponse,
    BoolResponse,
    GenericMapResponse,
    RestClient,
    SliceResponse,
    StringResponse,
)

__version__ = "0.1.0"

__all__ = [
    'RestClient',
    'create_rest_client',
    'setup_sdk_logger',
    'TransportProtocol',
    # Envelopes
    'BaseAPIResponse',
    'StringResponse',
    'BoolResponse',
    'GenericMapResponse',
    'SliceResponse',
    # Errors
    'PlatformError',
    'TransportError',
    'HttpError',
    'EnvelopeDecodeError',
    'EnvelopeError',
    'CardinalityError',
    'NotFoundError',
    'TooManyResultsError',
    'PreconditionError',
    'MissingIDError',
    'MissingAttributeError',
    'PermissionValidationError',
    'InvalidPrincipalTypeError',
    'InvalidRightError',
    'FieldDecodeError',
    'UnsupportedOperationError',
]
