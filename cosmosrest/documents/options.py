"""
Document Operation Options.

One option set per document operation. Each option set translates itself
into the request headers the Cosmos DB REST API expects through a shared
rule table: a field left at its zero value contributes no header, except for
the flags the service distinguishes from an absent header (upsert, is-query,
if-none-match), which are always sent.

Author: LocalZure Team
Date: 2025-12-18
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    HEADER_CONSISTENCY_LEVEL,
    HEADER_CONTENT_TYPE,
    HEADER_CONTINUATION,
    HEADER_ENABLE_CROSS_PARTITION,
    HEADER_IF_MATCH,
    HEADER_IF_NONE_MATCH,
    HEADER_INDEXINGDIRECTIVE,
    HEADER_IS_QUERY,
    HEADER_MAX_ITEM_COUNT,
    HEADER_PARTITIONKEY,
    HEADER_SESSION_TOKEN,
    HEADER_TRIGGER_POST_INCLUDE,
    HEADER_TRIGGER_PRE_INCLUDE,
    HEADER_UPSERT,
    QUERY_CONTENT_TYPE,
    ConsistencyLevel,
    IndexingDirective,
)
from .exceptions import WrongQueryContentTypeError


def encode_partition_key(value: str) -> str:
    """Encode a partition key value as a single-element JSON array."""
    return json.dumps([value])


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def encode_list(values: List[str]) -> str:
    return ",".join(values)


def encode_enum(value: Any) -> str:
    return value.value


@dataclass(frozen=True)
class HeaderRule:
    """Maps one option field to one request header.

    Attributes:
        field: Option field name
        header: Wire header name
        encode: Converts the field value to the header value
        always: Emit even when the field holds its zero value
    """

    field: str
    header: str
    encode: Callable[[Any], str] = str
    always: bool = False

    def apply(self, options: BaseModel, headers: Dict[str, str]) -> None:
        value = getattr(options, self.field)
        if self.always or value:
            headers[self.header] = self.encode(value)


def translate_headers(options: BaseModel, rules: Tuple[HeaderRule, ...]) -> Dict[str, str]:
    """
    Build the header mapping for an option set.

    Args:
        options: Option set instance
        rules: Header rules of the option set

    Returns:
        Header name to header value mapping
    """
    headers: Dict[str, str] = {}
    for rule in rules:
        rule.apply(options, headers)
    return headers


PARTITION_KEY_RULE = HeaderRule("partition_key_value", HEADER_PARTITIONKEY, encode_partition_key)
INDEXING_DIRECTIVE_RULE = HeaderRule("indexing_directive", HEADER_INDEXINGDIRECTIVE, encode_enum)
PRE_TRIGGERS_RULE = HeaderRule("pre_triggers_include", HEADER_TRIGGER_PRE_INCLUDE, encode_list)
POST_TRIGGERS_RULE = HeaderRule("post_triggers_include", HEADER_TRIGGER_POST_INCLUDE, encode_list)
CONSISTENCY_LEVEL_RULE = HeaderRule("consistency_level", HEADER_CONSISTENCY_LEVEL, encode_enum)
SESSION_TOKEN_RULE = HeaderRule("session_token", HEADER_SESSION_TOKEN)


class DocumentOptions(BaseModel):
    """Base class for option sets.

    Option sets are immutable values built per call.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = ()

    def as_headers(self) -> Dict[str, str]:
        """Translate the options into request headers."""
        return translate_headers(self, self.header_rules)


class CreateDocumentOptions(DocumentOptions):
    """Options for creating a document.

    Attributes:
        partition_key_value: Partition key of the new document
        is_upsert: Replace the document if it already exists
        indexing_directive: Include or exclude the document from indexing
        pre_triggers_include: Triggers to run before the write
        post_triggers_include: Triggers to run after the write
    """

    partition_key_value: str = ""
    is_upsert: bool = False
    indexing_directive: Optional[IndexingDirective] = None
    pre_triggers_include: List[str] = Field(default_factory=list)
    post_triggers_include: List[str] = Field(default_factory=list)

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        PARTITION_KEY_RULE,
        HeaderRule("is_upsert", HEADER_UPSERT, encode_bool, always=True),
        INDEXING_DIRECTIVE_RULE,
        PRE_TRIGGERS_RULE,
        POST_TRIGGERS_RULE,
    )


class UpsertDocumentOptions(DocumentOptions):
    """Options for upserting a document.

    Upsert is not supported yet; the type exists so callers can be written
    against the final signature.
    """

    pre_triggers_include: List[str] = Field(default_factory=list)
    post_triggers_include: List[str] = Field(default_factory=list)

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        PRE_TRIGGERS_RULE,
        POST_TRIGGERS_RULE,
    )


class GetDocumentOptions(DocumentOptions):
    """Options for reading a single document.

    Attributes:
        if_none_match: Request a conditional read
        partition_key_value: Partition key of the document
        consistency_level: Consistency override for this read
        session_token: Session token for session consistency
    """

    if_none_match: bool = False
    partition_key_value: str = ""
    consistency_level: Optional[ConsistencyLevel] = None
    session_token: str = ""

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        HeaderRule("if_none_match", HEADER_IF_NONE_MATCH, encode_bool, always=True),
        PARTITION_KEY_RULE,
        CONSISTENCY_LEVEL_RULE,
        SESSION_TOKEN_RULE,
    )


class ReplaceDocumentOptions(DocumentOptions):
    """Options for replacing a whole document.

    Attributes:
        partition_key_value: Partition key of the document
        indexing_directive: Include or exclude the document from indexing
        pre_triggers_include: Triggers to run before the write
        post_triggers_include: Triggers to run after the write
        if_match: ETag the stored document must still carry
    """

    partition_key_value: str = ""
    indexing_directive: Optional[IndexingDirective] = None
    pre_triggers_include: List[str] = Field(default_factory=list)
    post_triggers_include: List[str] = Field(default_factory=list)
    if_match: str = ""

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        PARTITION_KEY_RULE,
        INDEXING_DIRECTIVE_RULE,
        PRE_TRIGGERS_RULE,
        POST_TRIGGERS_RULE,
        HeaderRule("if_match", HEADER_IF_MATCH),
    )


class DeleteDocumentOptions(DocumentOptions):
    """Options for deleting a document."""

    partition_key_value: str = ""
    pre_triggers_include: List[str] = Field(default_factory=list)
    post_triggers_include: List[str] = Field(default_factory=list)

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        PARTITION_KEY_RULE,
        PRE_TRIGGERS_RULE,
        POST_TRIGGERS_RULE,
    )


class QueryDocumentsOptions(DocumentOptions):
    """Options for querying the documents of a collection.

    The service only accepts queries posted with the query media type and
    the is-query flag; use ``default_query_document_options`` to start from
    a valid configuration.

    Attributes:
        partition_key_value: Restrict the query to one partition
        is_query: Is-query flag, always sent
        content_type: Must equal QUERY_CONTENT_TYPE
        max_item_count: Page size, 0 leaves it to the service
        continuation: Continuation token of the page to fetch
        enable_cross_partition: Allow fan-out across partitions
        consistency_level: Consistency override for this query
        session_token: Session token for session consistency
    """

    partition_key_value: str = ""
    is_query: bool = False
    content_type: str = ""
    max_item_count: int = Field(default=0, ge=0)
    continuation: str = ""
    enable_cross_partition: bool = False
    consistency_level: Optional[ConsistencyLevel] = None
    session_token: str = ""

    header_rules: ClassVar[Tuple[HeaderRule, ...]] = (
        PARTITION_KEY_RULE,
        HeaderRule("is_query", HEADER_IS_QUERY, encode_bool, always=True),
        HeaderRule("content_type", HEADER_CONTENT_TYPE),
        HeaderRule("max_item_count", HEADER_MAX_ITEM_COUNT),
        HeaderRule("continuation", HEADER_CONTINUATION),
        HeaderRule("enable_cross_partition", HEADER_ENABLE_CROSS_PARTITION, encode_bool),
        CONSISTENCY_LEVEL_RULE,
        SESSION_TOKEN_RULE,
    )

    def as_headers(self) -> Dict[str, str]:
        """Translate the options into request headers.

        Raises:
            WrongQueryContentTypeError: If content_type is not the query media type
        """
        if self.content_type != QUERY_CONTENT_TYPE:
            raise WrongQueryContentTypeError(self.content_type, QUERY_CONTENT_TYPE)
        return super().as_headers()


def default_query_document_options(**overrides: Any) -> QueryDocumentsOptions:
    """
    Return query options populated with the values the service requires.

    Args:
        **overrides: Additional QueryDocumentsOptions fields

    Returns:
        QueryDocumentsOptions with is_query set and the query content type
    """
    values: Dict[str, Any] = {"is_query": True, "content_type": QUERY_CONTENT_TYPE}
    values.update(overrides)
    return QueryDocumentsOptions(**values)
