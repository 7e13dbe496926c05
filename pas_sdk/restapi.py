"""
PAS REST Client

Synchronous JSON-over-HTTP transport for the PAS API. Every call is a POST
to a method path; the body is decoded into a response envelope model.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from urllib.parse import urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .protocols import EnvelopeDecodeError, EnvelopeError, HttpError, TransportError

logger = logging.getLogger(__name__)

SOURCE_HEADER = "pas-sdk"


# ============ Response Envelopes ============

class BaseAPIResponse(BaseModel):
    """Standard PAS API response, Result left undecoded"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    result: Any = Field(None, alias="Result")
    message: Optional[str] = Field(None, alias="Message")
    exception: Optional[str] = Field(None, alias="Exception")

    def raise_for_failure(self) -> None:
        """Raise EnvelopeError if the envelope reports failure"""
        if not self.success:
            raise EnvelopeError(self.message, self.exception)


class StringResponse(BaseAPIResponse):
    """Response whose Result is a string (usually a new object ID)"""
    result: Optional[str] = Field(None, alias="Result")


class BoolResponse(BaseAPIResponse):
    """Response whose Result is a boolean"""
    result: Optional[bool] = Field(None, alias="Result")


class GenericMapResponse(BaseAPIResponse):
    """Response whose Result is a JSON object"""
    result: Dict[str, Any] = Field(default_factory=dict, alias="Result")

    @field_validator("result", mode="before")
    @classmethod
    def _null_result(cls, value):
        return {} if value is None else value


class SliceResponse(BaseAPIResponse):
    """Response whose Result is a JSON array"""
    result: List[Any] = Field(default_factory=list, alias="Result")

    @field_validator("result", mode="before")
    @classmethod
    def _null_result(cls, value):
        return [] if value is None else value


EnvelopeT = TypeVar("EnvelopeT", bound=BaseAPIResponse)


# ============ Client ============

class RestClient:
    """
    Stateful PAS API client.

    Cookies are kept between calls by the underlying httpx.Client, so a
    single instance represents one session against one tenant.

    Usage:
        with RestClient("https://tenant.example.com", token="...") as client:
            resp = client.call("/ServerManage/GetSecret", {"ID": secret_id})
    """

    def __init__(
        self,
        service: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        source_header: str = SOURCE_HEADER,
        timeout: float = 30.0,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize REST client

        Args:
            service: Tenant URL; scheme is forced to https and any path dropped
            token: Bearer token added as Authorization header (optional)
            headers: Extra headers sent with every call (optional)
            source_header: Value of the X-CFY-SRC header
            timeout: Request timeout in seconds
            verify: Verify TLS certificates
            transport: httpx transport override (tests, proxies)
        """
        self.service = self._normalize_service(service)
        self.source_header = source_header
        self.headers: Dict[str, str] = dict(headers or {})
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.response_headers: Optional[httpx.Headers] = None

        self.client = httpx.Client(
            base_url=self.service,
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

        logger.debug(f"Initialized REST client for {self.service}")

    @staticmethod
    def _normalize_service(service: str) -> str:
        parts = urlsplit(service if "://" in service else f"https://{service}")
        return f"https://{parts.netloc}"

    def close(self):
        """Close HTTP client"""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ========================================
    # API calls
    # ========================================

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-CENTRIFY-NATIVE-CLIENT": "Yes",
            "X-CFY-SRC": self.source_header,
        }
        headers.update(self.headers)
        return headers

    def _post(self, method: str, args: Union[Dict[str, Any], List[Dict[str, Any]], None]) -> bytes:
        path = "/" + method.lstrip("/")
        logger.debug(f"Post url: {self.service}{path}")

        try:
            response = self.client.post(path, json=args, headers=self._build_headers())
        except httpx.HTTPError as e:
            self.response_headers = None
            logger.error(f"POST to {method} failed: {e}")
            raise TransportError(f"POST to {method} failed: {e}") from e

        self.response_headers = response.headers

        if response.status_code != 200:
            message = f"POST to {method} failed with code {response.status_code}, body: {response.text}"
            logger.error(message)
            raise HttpError(message, response.status_code)

        return response.content

    def call(
        self,
        method: str,
        args: Union[Dict[str, Any], List[Dict[str, Any]], None] = None,
        response_model: Type[EnvelopeT] = GenericMapResponse,
    ) -> EnvelopeT:
        """
        POST a JSON body to a method path and decode the response envelope.

        Args:
            method: API method path, e.g. "/ServerManage/GetSecret"
            args: Request body (object, or list for bulk APIs)
            response_model: Envelope model describing the Result shape

        Returns:
            Decoded envelope. The success flag is NOT checked here.

        Raises:
            TransportError: network failure or non-200 status
            EnvelopeDecodeError: body is not a valid envelope
        """
        body = self._post(method, args)
        try:
            return response_model.model_validate_json(body)
        except ValidationError as e:
            logger.error(f"Failed to decode {response_model.__name__} from {method}: {e}")
            raise EnvelopeDecodeError(
                f"Failed to unmarshal {response_model.__name__} from HTTP response: {e}"
            ) from e

    def call_raw_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> bytes:
        """POST and return the undecoded body"""
        return self._post(method, args)

    def call_base_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> BaseAPIResponse:
        return self.call(method, args, BaseAPIResponse)

    def call_generic_map_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> GenericMapResponse:
        return self.call(method, args, GenericMapResponse)

    def call_string_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> StringResponse:
        return self.call(method, args, StringResponse)

    def call_bool_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> BoolResponse:
        return self.call(method, args, BoolResponse)

    def call_slice_api(self, method: str, args: Optional[Dict[str, Any]] = None) -> SliceResponse:
        return self.call(method, args, SliceResponse)

    def call_generic_map_list_api(self, method: str, args: List[Dict[str, Any]]) -> GenericMapResponse:
        """Bulk APIs (e.g. admin right assignment) take a JSON array body"""
        return self.call(method, args, GenericMapResponse)

    def download_file(self, method: str, args: Optional[Dict[str, Any]], filepath: str) -> None:
        """
        POST and stream a 200 response body into a file.

        The body is written to ``<filepath>.part`` and moved into place only
        once complete, so a failed download never leaves a truncated file.

        Args:
            method: API method path
            args: Request body
            filepath: Destination file
        """
        path = "/" + method.lstrip("/")
        part_path = f"{filepath}.part"
        try:
            with self.client.stream("POST", path, json=args, headers=self._build_headers()) as response:
                self.response_headers = response.headers
                if response.status_code != 200:
                    response.read()
                    message = f"POST to {method} failed with code {response.status_code}, body: {response.text}"
                    logger.error(message)
                    raise HttpError(message, response.status_code)
                with open(part_path, "wb") as out:
                    for chunk in response.iter_bytes():
                        out.write(chunk)
            os.replace(part_path, filepath)
        except httpx.HTTPError as e:
            self.response_headers = None
            logger.error(f"Download from {method} failed: {e}")
            raise TransportError(f"Download from {method} failed: {e}") from e
        finally:
            if os.path.exists(part_path):
                os.remove(part_path)

    def get_last_response_headers(self) -> Optional[httpx.Headers]:
        """Response headers of the last call"""
        return self.response_headers


__all__ = [
    "RestClient",
    "BaseAPIResponse",
    "StringResponse",
    "BoolResponse",
    "GenericMapResponse",
    "SliceResponse",
    "SOURCE_HEADER",
]
