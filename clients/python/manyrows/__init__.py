"""ManyRows Python Client.

A Python client for the ManyRows entity-management HTTP API.

Usage:
    from manyrows import (
        CreateEntityRequest,
        DeleteOneRequest,
        GetOneRequest,
        ManyRowsClient,
        QueryRequest,
    )

    client = ManyRowsClient("https://api.manyrows.com", "my-api-key")

    # Create entity
    created = client.create("acme", "orders", CreateEntityRequest(attributes={"total": 12}))

    # Query entities
    page = client.query("acme", "orders", QueryRequest(search="open", size=20))

    # Fetch one
    order = client.get_one("acme", "orders", GetOneRequest(created.id))

    # Delete entity
    client.delete_one("acme", "orders", DeleteOneRequest(created.id))
"""

from .client import ManyRowsClient
from .exceptions import (
    ClientError,
    ConnectionError,
    DecodeError,
    ManyRowsError,
    ServerError,
)
from .paging import PageRequest, PageResource
from .types import (
    CreateCollectionItemRequest,
    CreateEntityRequest,
    CreateEntityResponse,
    DeleteCollectionItemsRequest,
    DeleteOneRequest,
    DeleteRequest,
    Entity,
    ErrorInfo,
    Filter,
    GetOneRequest,
    MoveCollectionItemRequest,
    QueryRequest,
    QueryResponse,
    RelFilter,
    RequestOptions,
    UpdateRequest,
)

__version__ = "0.1.0"
__all__ = [
    "ManyRowsClient",
    "ManyRowsError",
    "ConnectionError",
    "ClientError",
    "ServerError",
    "DecodeError",
    "PageRequest",
    "PageResource",
    "Entity",
    "ErrorInfo",
    "Filter",
    "RelFilter",
    "RequestOptions",
    "QueryRequest",
    "QueryResponse",
    "GetOneRequest",
    "DeleteOneRequest",
    "CreateEntityRequest",
    "CreateEntityResponse",
    "UpdateRequest",
    "DeleteRequest",
    "CreateCollectionItemRequest",
    "MoveCollectionItemRequest",
    "DeleteCollectionItemsRequest",
]
