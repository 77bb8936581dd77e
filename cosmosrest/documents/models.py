"""
Document API Models.

Pydantic models for the resources and query payloads exchanged with the
Cosmos DB document REST API.

Author: LocalZure Team
Date: 2025-12-18
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """System properties shared by every stored entity.
    
    Attributes:
        id: User-supplied identifier
        _rid: Resource ID (system-generated)
        _ts: Timestamp (system-generated)
        _self: Self link (system-generated)
        _etag: ETag for optimistic concurrency (system-generated)
    """
    
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    
    id: str = ""
    rid: str = Field(default="", alias="_rid")
    ts: int = Field(default=0, alias="_ts")
    self_link: str = Field(default="", alias="_self")
    etag: str = Field(default="", alias="_etag")


class Document(Resource):
    """Cosmos DB document.
    
    User fields are kept as extra attributes.
    """
    
    attachments: str = Field(default="", alias="_attachments")


class QueryParameter(BaseModel):
    """Named parameter of a parameterized query."""
    
    name: str
    value: Any = None


class Query(BaseModel):
    """SQL query sent in the body of a query request.
    
    Attributes:
        query: SQL query string
        parameters: Query parameters for parameterized queries
    """
    
    query: str
    parameters: List[QueryParameter] = Field(default_factory=list)
    
    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class QueryPage(BaseModel):
    """One page of query results as returned by a transport.
    
    Attributes:
        documents: Raw documents of the page
        count: Number of documents in the page
        continuation: Continuation token of the next page
        session_token: Session token issued by the service
        request_charge: Request units consumed
        activity_id: Service activity id
    """
    
    documents: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    continuation: Optional[str] = None
    session_token: Optional[str] = None
    request_charge: float = 0.0
    activity_id: Optional[str] = None


@dataclass
class QueryDocumentsResponse:
    """Result of a document query.
    
    ``documents`` is the list the caller passed in, extended in place with
    the page's documents.
    """
    
    documents: List[Any] = field(default_factory=list)
    count: int = 0
    continuation: Optional[str] = None
    session_token: Optional[str] = None
    request_charge: float = 0.0
    activity_id: Optional[str] = None
    
    @property
    def has_more_results(self) -> bool:
        return bool(self.continuation)
