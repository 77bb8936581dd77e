"""
Document Transports.

Defines the interface the document client dispatches to, and the HTTP
implementation talking to a Cosmos DB endpoint (or the LocalZure emulator)
over httpx.

Author: LocalZure Team
Date: 2025-12-18
"""

import json
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel

from cosmosrest.auth.exceptions import MissingMasterKeyError
from cosmosrest.auth.masterkey import MasterKeyCredentials, format_request_date
from cosmosrest.core.config_manager import ClientConfig
from cosmosrest.core.logging_config import activity_scope, get_logger

from .addressing import parse_resource_link
from .constants import (
    DEFAULT_API_VERSION,
    HEADER_ACCEPT,
    HEADER_ACTIVITY_ID,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_CONTINUATION,
    HEADER_DATE,
    HEADER_ITEM_COUNT,
    HEADER_REQUEST_CHARGE,
    HEADER_SESSION_TOKEN,
    HEADER_VERSION,
    JSON_CONTENT_TYPE,
    QUERY_CONTENT_TYPE,
)
from .exceptions import CosmosTransportError, raise_for_status
from .models import Query, QueryPage

logger = get_logger(__name__)


@runtime_checkable
class DocumentTransport(Protocol):
    """Protocol defining the transport interface.

    Transports are responsible for:
    - Serializing request bodies and performing the network exchange
    - Signing requests
    - Decoding response bodies
    - Raising appropriate exceptions for error responses

    All methods are coroutines; cancelling the awaiting task must abort the
    exchange.
    """

    async def create(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        """POST a new resource to a feed path and return the stored resource."""
        ...

    async def get(self, path: str, headers: Mapping[str, str]) -> Dict[str, Any]:
        """GET a single resource."""
        ...

    async def replace(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        """PUT a resource over an existing one and return the stored resource."""
        ...

    async def delete(self, path: str, headers: Mapping[str, str]) -> None:
        """DELETE a single resource."""
        ...

    async def query(self, path: str, query: Query, headers: Mapping[str, str]) -> QueryPage:
        """POST a query to a feed path and return one page of results."""
        ...


class HttpTransport:
    """
    httpx-based transport for the Cosmos DB REST API.

    Usage:
        async with HttpTransport("https://localhost:8081", key) as transport:
            client = DocumentClient(transport)
            ...

    Attributes:
        endpoint: Account endpoint URL
        api_version: Value sent in x-ms-version
    """

    def __init__(
        self,
        endpoint: str,
        master_key: Optional[str] = None,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize HTTP transport.

        Args:
            endpoint: Account endpoint URL
            master_key: Base64-encoded master key; requests are unsigned if omitted
            api_version: REST API version
            timeout: Request timeout in seconds
            client: Preconfigured httpx client (its base_url is used as-is)
        """
        self.endpoint = endpoint.rstrip("/")
        self.api_version = api_version
        self._credentials = MasterKeyCredentials(master_key) if master_key else None
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.endpoint, timeout=timeout)

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def create(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        response = await self._request("POST", path, headers, body=body)
        return self._decode(response)

    async def get(self, path: str, headers: Mapping[str, str]) -> Dict[str, Any]:
        response = await self._request("GET", path, headers)
        return self._decode(response)

    async def replace(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        response = await self._request("PUT", path, headers, body=body)
        return self._decode(response)

    async def delete(self, path: str, headers: Mapping[str, str]) -> None:
        await self._request("DELETE", path, headers)

    async def query(self, path: str, query: Query, headers: Mapping[str, str]) -> QueryPage:
        request_headers = dict(headers)
        request_headers.setdefault(HEADER_CONTENT_TYPE, QUERY_CONTENT_TYPE)
        response = await self._request("POST", path, request_headers, body=query.to_body())

        payload = self._decode(response)
        documents = payload.get("Documents", [])
        return QueryPage(
            documents=documents,
            count=payload.get("_count", len(documents)),
            continuation=response.headers.get(HEADER_CONTINUATION) or payload.get("_continuation"),
            session_token=response.headers.get(HEADER_SESSION_TOKEN),
            request_charge=float(response.headers.get(HEADER_REQUEST_CHARGE, 0) or 0),
            activity_id=response.headers.get(HEADER_ACTIVITY_ID),
        )

    def _build_headers(self, method: str, path: str, headers: Mapping[str, str]) -> Dict[str, str]:
        """Merge operation headers with the ones every request carries."""
        date = format_request_date()
        request_headers = {
            HEADER_DATE: date,
            HEADER_VERSION: self.api_version,
            HEADER_ACCEPT: JSON_CONTENT_TYPE,
        }
        request_headers.update(headers)

        if self._credentials is not None:
            resource_type, resource_link = parse_resource_link(path)
            request_headers[HEADER_AUTHORIZATION] = self._credentials.authorization(
                method, resource_type, resource_link, date
            )
        elif HEADER_AUTHORIZATION not in request_headers:
            logger.debug(f"Sending unsigned {method} request to {path}")

        return request_headers

    async def _request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str],
        body: Any = None
    ) -> httpx.Response:
        request_headers = self._build_headers(method, path, headers)
        content: Optional[bytes] = None
        if body is not None:
            request_headers.setdefault(HEADER_CONTENT_TYPE, JSON_CONTENT_TYPE)
            content = self._encode(body)

        logger.debug(f"{method} /{path} headers={sorted(headers)}")

        try:
            response = await self._client.request(
                method,
                f"/{path.lstrip('/')}",
                headers=request_headers,
                content=content,
            )
        except httpx.TransportError as e:
            logger.warning(f"{method} /{path} failed: {e}")
            raise CosmosTransportError(f"{method} /{path} failed: {e}") from e

        activity = response.headers.get(HEADER_ACTIVITY_ID)
        with activity_scope(activity):
            if response.status_code >= 400 or response.status_code == 304:
                logger.warning(f"{method} /{path} returned {response.status_code}")
                raise_for_status(
                    response.status_code,
                    self._decode_error(response),
                    activity_id=activity,
                )

            logger.debug(
                f"{method} /{path} -> {response.status_code} "
                f"items={response.headers.get(HEADER_ITEM_COUNT)} "
                f"charge={response.headers.get(HEADER_REQUEST_CHARGE)}"
            )
        return response

    @staticmethod
    def _encode(body: Any) -> bytes:
        if isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return json.dumps(body).encode("utf-8")

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        if not response.content:
            return {}
        return response.json()

    @staticmethod
    def _decode_error(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return {"message": response.text} if response.text else None


def create_http_transport(config: ClientConfig) -> HttpTransport:
    """Build an HttpTransport from a ClientConfig."""
    if config.master_key is None and config.require_auth:
        raise MissingMasterKeyError()
    return HttpTransport(
        endpoint=config.endpoint,
        master_key=config.master_key,
        api_version=config.api_version,
        timeout=config.timeout,
    )
