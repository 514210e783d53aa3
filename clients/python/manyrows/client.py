"""ManyRows HTTP client."""

import gzip
import json
import logging
import os
import uuid
import zlib
from typing import Any, Callable

import httpx

from .exceptions import ClientError, ConnectionError, DecodeError, ServerError
from .types import (
    CreateCollectionItemRequest,
    CreateEntityRequest,
    CreateEntityResponse,
    DeleteCollectionItemsRequest,
    DeleteOneRequest,
    DeleteRequest,
    Entity,
    ErrorInfo,
    GetOneRequest,
    MoveCollectionItemRequest,
    QueryRequest,
    QueryResponse,
    RequestOptions,
    UpdateRequest,
)

logger = logging.getLogger(__name__)

API_VERSION = "v1"
AUTH_HEADER = "ManyRowsAuthToken"
GZIP_MAGIC = b"\x1f\x8b"

_TRUTHY = {"1", "true", "t", "y", "yes", "on"}


def default_http_client(timeout: float = 30.0) -> httpx.Client:
    """Build the transport used when the caller does not supply one."""
    return httpx.Client(timeout=httpx.Timeout(timeout, connect=10.0))


class ManyRowsClient:
    """HTTP client for the ManyRows API.

    Args:
        base_url: Base URL of the API (e.g., "https://api.manyrows.com").
        api_key: Token sent in the ``ManyRowsAuthToken`` header.
        http_client: Transport to use. A caller-supplied client is shared
            and never closed by this class.
        accept_gzip: Ask for compressed responses and decode them.
        timeout: Request timeout in seconds for the default transport.

    Every request model accepts ``base_url`` and ``api_key`` keywords that
    override the client values for that call when non-empty.

    Example:
        >>> client = ManyRowsClient("https://api.manyrows.com", "secret")
        >>> page = client.query("acme", "orders", QueryRequest(search="open", size=20))
        >>> print(f"{page.total} orders, showing {len(page.items)}")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: httpx.Client | None = None,
        accept_gzip: bool = False,
        timeout: float = 30.0,
    ):
        self.base_url = _normalize_url(base_url)
        self.api_key = api_key
        self.accept_gzip = accept_gzip
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else default_http_client(timeout)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ManyRowsClient":
        """Build a client from ``MANYROWS_*`` environment variables.

        Reads ``MANYROWS_BASE_URL``, ``MANYROWS_API_KEY`` and
        ``MANYROWS_ACCEPT_GZIP``. Keyword arguments take precedence.
        """
        kwargs.setdefault("base_url", os.environ.get("MANYROWS_BASE_URL", ""))
        kwargs.setdefault("api_key", os.environ.get("MANYROWS_API_KEY", ""))
        kwargs.setdefault(
            "accept_gzip",
            os.environ.get("MANYROWS_ACCEPT_GZIP", "").strip().lower() in _TRUTHY,
        )
        return cls(**kwargs)

    @property
    def http_client(self) -> httpx.Client:
        """The underlying HTTP transport."""
        return self._client

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ManyRowsClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Entities

    def query(self, project: str, kind: str, req: QueryRequest) -> QueryResponse:
        """Query entities of a kind.

        Args:
            project: Project path.
            kind: Entity kind path.
            req: Search, sort, filters and page.

        Returns:
            QueryResponse with the matched page of entities.
        """
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}/query"
        return self._request(
            "POST", url, api_key, req.to_payload(), decode=QueryResponse.from_response
        )

    def get_one(self, project: str, kind: str, req: GetOneRequest) -> Entity:
        """Fetch a single entity by ID."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}/{req.id}"
        return self._request("GET", url, api_key, decode=Entity.from_dict)

    def create(self, project: str, kind: str, req: CreateEntityRequest) -> CreateEntityResponse:
        """Create an entity.

        The API answers with no body; the new ID and its URL come back in the
        ``EntityID`` and ``Location`` headers.

        Raises:
            ClientError: The entity was rejected; ``error_info`` says why.
            DecodeError: The ``EntityID`` header is missing or not a UUID.
        """
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}"
        response, _ = self._send("POST", url, api_key, req.to_payload())
        entity_id = response.headers.get("EntityID", "")
        try:
            new_id = uuid.UUID(entity_id)
        except ValueError as e:
            raise DecodeError(
                f"Invalid EntityID header {entity_id!r}: {e}", response.status_code
            ) from e
        return CreateEntityResponse(id=new_id, location=response.headers.get("Location", ""))

    def update(self, project: str, kind: str, entity_id: uuid.UUID, req: UpdateRequest) -> None:
        """Replace the attributes and status of an entity."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}/{entity_id}"
        self._request("POST", url, api_key, req.to_payload())

    def delete_one(self, project: str, kind: str, req: DeleteOneRequest) -> None:
        """Delete a single entity by ID."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}/{req.id}"
        self._request("DELETE", url, api_key)

    def delete_entities(self, project: str, kind: str, req: DeleteRequest) -> None:
        """Delete several entities of a kind."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/entities/{kind}/delete"
        self._request("POST", url, api_key, req.to_payload())

    # Collections

    def query_collection(
        self, project: str, collection_id: uuid.UUID, req: QueryRequest
    ) -> QueryResponse:
        """Query the items of a collection."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/collections/{collection_id}/query"
        return self._request(
            "POST", url, api_key, req.to_payload(), decode=QueryResponse.from_response
        )

    def create_collection_item(
        self, project: str, collection_id: uuid.UUID, req: CreateCollectionItemRequest
    ) -> None:
        """Add a collection item linking ``req.entity1_id`` to ``req.entity2_id``."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/collections/{collection_id}"
        self._request("POST", url, api_key, req.to_payload())

    def move_collection_item(
        self, project: str, collection_id: uuid.UUID, req: MoveCollectionItemRequest
    ) -> None:
        """Move a collection item to position ``req.index``."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/collections/{collection_id}/move"
        self._request("POST", url, api_key, req.to_payload())

    def delete_collection_items(
        self, project: str, collection_id: uuid.UUID, req: DeleteCollectionItemsRequest
    ) -> None:
        """Remove items from a collection."""
        base_url, api_key = self._options(req)
        url = f"{base_url}/{API_VERSION}/{project}/collections/{collection_id}/remove"
        self._request("POST", url, api_key, req.to_payload())

    # Projects

    def delete_project(self, req: DeleteOneRequest) -> None:
        """Delete a whole project. This endpoint is not versioned."""
        base_url, api_key = self._options(req)
        self._request("DELETE", f"{base_url}/s/projects/{req.id}", api_key)

    def _options(self, opts: RequestOptions) -> tuple[str, str]:
        """Merge per-call overrides with the client defaults."""
        base_url = _normalize_url(opts.base_url) if opts.base_url else self.base_url
        api_key = opts.api_key or self.api_key
        return base_url, api_key

    def _request(
        self,
        method: str,
        url: str,
        api_key: str,
        payload: dict[str, Any] | None = None,
        decode: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Send a request and decode a successful body with ``decode``."""
        response, data = self._send(method, url, api_key, payload, read_body=decode is not None)
        if decode is None:
            return None
        try:
            return decode(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(
                f"Unexpected response body: {e}", response.status_code
            ) from e

    def _send(
        self,
        method: str,
        url: str,
        api_key: str,
        payload: dict[str, Any] | None = None,
        read_body: bool = False,
    ) -> tuple[httpx.Response, Any]:
        """Execute a request and classify its status code.

        The body is only read for 4xx responses and, with ``read_body``, for
        successful ones. Returns the response and its parsed body, if read.
        """
        headers = {AUTH_HEADER: api_key, "Content-Type": "application/json"}
        if self.accept_gzip:
            headers["Accept-Encoding"] = "gzip, deflate"
        request = self._client.build_request(method, url, headers=headers, json=payload)

        logger.debug("%s %s", method, url)
        try:
            response = self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise ConnectionError(f"{method} {url} failed: {e}")
        try:
            status = response.status_code
            logger.debug("%s %s -> %d", method, url, status)

            if 400 <= status < 500:
                logger.warning("%s %s returned %d", method, url, status)
                body = self._read_json(response)
                try:
                    error_info = ErrorInfo.from_response(body)
                except AttributeError as e:
                    raise DecodeError(f"Unexpected error body: {e}", status) from e
                error_info.http_code = status
                message = f"status code was {status}"
                if error_info.message:
                    message = f"{message}: {error_info.message}"
                raise ClientError(message, status, error_info)
            if status >= 500 or status < 200:
                logger.warning("%s %s returned %d", method, url, status)
                raise ServerError(
                    f"unexpected server error: status code was {status}",
                    status,
                    ErrorInfo(http_code=status),
                )
            data = self._read_json(response) if read_body else None
            return response, data
        finally:
            response.close()

    def _read_json(self, response: httpx.Response) -> Any:
        """Read a streamed body and parse it, gunzipping it first when requested."""
        try:
            content = response.read()
        except httpx.DecodingError as e:
            raise DecodeError(
                f"Failed to decode response body: {e}", response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to read response body: {e}", response.status_code)
        try:
            if self.accept_gzip and content[:2] == GZIP_MAGIC:
                content = gzip.decompress(content)
            return json.loads(content)
        except (OSError, EOFError, ValueError, zlib.error) as e:
            raise DecodeError(
                f"Failed to decode response body: {e}", response.status_code
            ) from e


def _normalize_url(url: str) -> str:
    return url.strip().rstrip("/")
