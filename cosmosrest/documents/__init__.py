"""
Cosmos DB Document Client.

Translates per-operation options into Cosmos DB REST API request headers and
dispatches document create, read, replace, delete and query operations to a
transport.

Author: LocalZure Team
Date: 2025-12-18
"""

from .addressing import (
    collection_link,
    database_link,
    doc_link,
    docs_link,
    parse_resource_link,
)
from .client import DocumentClient
from .constants import QUERY_CONTENT_TYPE, ConsistencyLevel, IndexingDirective
from .exceptions import (
    BadRequestError,
    ConfigurationError,
    ConflictError,
    CosmosClientError,
    CosmosHTTPError,
    CosmosTransportError,
    ForbiddenError,
    NotModifiedError,
    OperationNotImplementedError,
    PreconditionFailedError,
    RequestEntityTooLargeError,
    ResourceNotFoundError,
    TooManyRequestsError,
    UnauthorizedError,
    WrongQueryContentTypeError,
)
from .models import (
    Document,
    Query,
    QueryDocumentsResponse,
    QueryPage,
    QueryParameter,
    Resource,
)
from .options import (
    CreateDocumentOptions,
    DeleteDocumentOptions,
    GetDocumentOptions,
    HeaderRule,
    QueryDocumentsOptions,
    ReplaceDocumentOptions,
    UpsertDocumentOptions,
    default_query_document_options,
    translate_headers,
)
from .transport import DocumentTransport, HttpTransport, create_http_transport

__all__ = [
    # Client & transports
    "DocumentClient",
    "DocumentTransport",
    "HttpTransport",
    "create_http_transport",
    # Addressing
    "database_link",
    "collection_link",
    "docs_link",
    "doc_link",
    "parse_resource_link",
    # Options
    "QUERY_CONTENT_TYPE",
    "IndexingDirective",
    "ConsistencyLevel",
    "HeaderRule",
    "translate_headers",
    "CreateDocumentOptions",
    "UpsertDocumentOptions",
    "GetDocumentOptions",
    "ReplaceDocumentOptions",
    "DeleteDocumentOptions",
    "QueryDocumentsOptions",
    "default_query_document_options",
    # Models
    "Resource",
    "Document",
    "Query",
    "QueryParameter",
    "QueryPage",
    "QueryDocumentsResponse",
    # Exceptions
    "CosmosClientError",
    "ConfigurationError",
    "WrongQueryContentTypeError",
    "OperationNotImplementedError",
    "CosmosTransportError",
    "CosmosHTTPError",
    "NotModifiedError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "ResourceNotFoundError",
    "ConflictError",
    "PreconditionFailedError",
    "RequestEntityTooLargeError",
    "TooManyRequestsError",
]
