"""
Document API Constants.

Wire-level header names, the accepted query media type and the closed
enumerations used by the document option sets.

Author: LocalZure Team
Date: 2025-12-18
"""

from enum import Enum


# Request headers emitted by the option sets
HEADER_PARTITIONKEY = "x-ms-documentdb-partitionkey"
HEADER_UPSERT = "x-ms-documentdb-is-upsert"
HEADER_INDEXINGDIRECTIVE = "x-ms-indexing-directive"
HEADER_TRIGGER_PRE_INCLUDE = "x-ms-documentdb-pre-trigger-include"
HEADER_TRIGGER_POST_INCLUDE = "x-ms-documentdb-post-trigger-include"
HEADER_IF_NONE_MATCH = "If-None-Match"
HEADER_CONSISTENCY_LEVEL = "x-ms-consistency-level"
HEADER_SESSION_TOKEN = "x-ms-session-token"
HEADER_IF_MATCH = "If-Match"
HEADER_IS_QUERY = "x-ms-documentdb-isquery"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_MAX_ITEM_COUNT = "x-ms-max-item-count"
HEADER_CONTINUATION = "x-ms-continuation"
HEADER_ENABLE_CROSS_PARTITION = "x-ms-documentdb-query-enablecrosspartition"

# Headers owned by the transport
HEADER_DATE = "x-ms-date"
HEADER_VERSION = "x-ms-version"
HEADER_AUTHORIZATION = "authorization"
HEADER_ACCEPT = "Accept"
HEADER_REQUEST_CHARGE = "x-ms-request-charge"
HEADER_ACTIVITY_ID = "x-ms-activity-id"
HEADER_ITEM_COUNT = "x-ms-item-count"

QUERY_CONTENT_TYPE = "application/query+json"
JSON_CONTENT_TYPE = "application/json"

DEFAULT_API_VERSION = "2018-12-31"


class IndexingDirective(str, Enum):
    """Whether the service indexes a written document."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


class ConsistencyLevel(str, Enum):
    """Read consistency guarantee requested for a single operation."""
    STRONG = "Strong"
    BOUNDED = "Bounded"
    SESSION = "Session"
    EVENTUAL = "Eventual"
