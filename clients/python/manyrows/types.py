"""Type definitions for the ManyRows client."""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .paging import PageRequest, PageResource

NIL_UUID = uuid.UUID(int=0)

# fromisoformat wants exactly 6 fractional digits before 3.11
_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an RFC 3339 timestamp as sent by the API."""
    if not value:
        return None
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_uuid(value: Any) -> uuid.UUID | None:
    if value is None or value == "":
        return None
    return uuid.UUID(str(value))


@dataclass
class Entity:
    """A record stored in a ManyRows project."""

    id: uuid.UUID
    status: int = 0
    attributes: dict[str, Any] = field(default_factory=dict)
    collection_item_id: uuid.UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entity":
        """Create Entity from its JSON representation."""
        return cls(
            id=uuid.UUID(data["id"]),
            status=data.get("status") or 0,
            attributes=data.get("attributes") or {},
            collection_item_id=parse_uuid(data.get("collectionItemId")),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
        )


@dataclass(kw_only=True)
class RequestOptions:
    """Per-call overrides of the client's base URL and API key.

    Empty strings mean the client-level value applies.
    """

    base_url: str = ""
    api_key: str = ""


@dataclass
class Filter:
    """Match entities whose attribute equals a value."""

    attribute_key: str
    value: Any = None

    def to_payload(self) -> dict[str, Any]:
        return {"attributeKey": self.attribute_key, "value": self.value}


@dataclass
class RelFilter:
    """Restrict a query to entities related to ``entity_id`` via ``rel_def_id``."""

    rel_def_id: uuid.UUID
    entity_id: uuid.UUID

    def to_payload(self) -> dict[str, Any]:
        return {"relDefId": str(self.rel_def_id), "entityId": str(self.entity_id)}


@dataclass
class QueryRequest(PageRequest, RequestOptions):
    """Search, sort, filter and page through entities or collection items."""

    search: str = ""
    sort: str = ""
    sort_direction: str = ""
    status: int = 0
    filters: list[Filter] = field(default_factory=list)
    expand_sub_entities: bool = False
    rel_filter: RelFilter | None = None
    collection_parent_entity_id: uuid.UUID | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            **self.page_payload(),
            "search": self.search,
            "sort": self.sort,
            "sortDirection": self.sort_direction,
            "status": self.status,
            "filters": [f.to_payload() for f in self.filters],
            "expandSubEntities": self.expand_sub_entities,
            "collectionParentEntityId": str(self.collection_parent_entity_id or NIL_UUID),
        }
        if self.rel_filter is not None:
            payload["relFilter"] = self.rel_filter.to_payload()
        return payload


@dataclass
class QueryResponse(PageResource):
    """One page of query results."""

    items: list[Entity] = field(default_factory=list)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "QueryResponse":
        """Create QueryResponse from API response."""
        return cls(
            items=[Entity.from_dict(item) for item in response.get("items") or []],
            **cls.page_fields(response),
        )


@dataclass
class GetOneRequest(RequestOptions):
    id: uuid.UUID


@dataclass
class DeleteOneRequest(RequestOptions):
    id: uuid.UUID


@dataclass
class CreateEntityRequest(RequestOptions):
    attributes: dict[str, Any] = field(default_factory=dict)
    status: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {"attributes": self.attributes, "status": self.status}


@dataclass
class CreateEntityResponse:
    """Identifier and location of a newly created entity."""

    id: uuid.UUID
    location: str = ""


@dataclass
class UpdateRequest(RequestOptions):
    attributes: dict[str, Any] = field(default_factory=dict)
    status: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {"attributes": self.attributes, "status": self.status}


@dataclass
class DeleteRequest(RequestOptions):
    ids: list[uuid.UUID] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"ids": [str(i) for i in self.ids]}


@dataclass
class CreateCollectionItemRequest(RequestOptions):
    """Link two entities through a collection."""

    entity1_id: uuid.UUID
    entity2_id: uuid.UUID

    def to_payload(self) -> dict[str, Any]:
        return {"entity1Id": str(self.entity1_id), "entity2Id": str(self.entity2_id)}


@dataclass
class MoveCollectionItemRequest(RequestOptions):
    """Move a collection item to a new position."""

    collection_item_id: uuid.UUID
    index: int

    def to_payload(self) -> dict[str, Any]:
        return {"collectionItemId": str(self.collection_item_id), "index": self.index}


@dataclass
class DeleteCollectionItemsRequest(RequestOptions):
    collection_item_ids: list[uuid.UUID] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {"ids": [str(i) for i in self.collection_item_ids]}


@dataclass
class ErrorInfo:
    """Structured error detail returned with 4xx responses."""

    field: str = ""
    extra: Any = None
    message: str = ""
    http_code: int = 0
    reason: str = ""

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> "ErrorInfo":
        """Create ErrorInfo from an error response body."""
        return cls(
            field=response.get("field") or "",
            extra=response.get("extra"),
            message=response.get("message") or "",
            http_code=response.get("httpCode") or 0,
            reason=response.get("reason") or "",
        )
