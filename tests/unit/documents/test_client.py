"""
Unit tests for the document client.

Tests operation dispatch against a recording transport: link building,
header translation, result handling and error propagation.

Author: LocalZure Team
Date: 2025-12-18
"""

import asyncio

import pytest

from cosmosrest.documents.client import DocumentClient
from cosmosrest.documents.constants import (
    HEADER_CONTENT_TYPE,
    HEADER_IF_MATCH,
    HEADER_IF_NONE_MATCH,
    HEADER_IS_QUERY,
    HEADER_PARTITIONKEY,
    HEADER_TRIGGER_PRE_INCLUDE,
    HEADER_UPSERT,
    QUERY_CONTENT_TYPE,
)
from cosmosrest.documents.exceptions import (
    ConflictError,
    OperationNotImplementedError,
    PreconditionFailedError,
    ResourceNotFoundError,
    WrongQueryContentTypeError,
)
from cosmosrest.documents.models import Document, Query, QueryParameter, Resource
from cosmosrest.documents.options import (
    CreateDocumentOptions,
    DeleteDocumentOptions,
    GetDocumentOptions,
    QueryDocumentsOptions,
    ReplaceDocumentOptions,
    UpsertDocumentOptions,
    default_query_document_options,
)
from cosmosrest.documents.transport import DocumentTransport


@pytest.fixture
def client(transport):
    """Create a client bound to the recording transport."""
    return DocumentClient(transport)


def test_recording_transport_matches_protocol(transport):
    """Test the test double satisfies the transport protocol."""
    assert isinstance(transport, DocumentTransport)


class TestCreateDocument:
    """Test create dispatch."""

    @pytest.mark.asyncio
    async def test_create_document(self, client, transport):
        """Test creating a document."""
        body = {"id": "doc1", "name": "Widget"}
        options = CreateDocumentOptions(partition_key_value="p1", pre_triggers_include=["a", "b"])

        resource = await client.create_document("shop", "orders", body, options)

        assert isinstance(resource, Resource)
        assert resource.id == "doc1"
        assert resource.etag == '"etag-1"'
        assert resource.rid == "rid1"

        method, path, payload, headers = transport.calls[0]
        assert method == "create"
        assert path == "dbs/shop/colls/orders/docs"
        assert payload is body
        assert headers == {
            HEADER_PARTITIONKEY: '["p1"]',
            HEADER_UPSERT: "false",
            HEADER_TRIGGER_PRE_INCLUDE: "a,b",
        }

    @pytest.mark.asyncio
    async def test_create_without_options(self, client, transport):
        """Test None options behave like default options."""
        await client.create_document("shop", "orders", {"id": "doc1"})

        assert transport.calls[0][3] == {HEADER_UPSERT: "false"}

    @pytest.mark.asyncio
    async def test_create_with_model_body(self, client, transport):
        """Test a pydantic document is handed to the transport untouched."""
        document = Document(id="doc1", name="Widget")

        await client.create_document("shop", "orders", document)

        assert transport.calls[0][2] is document

    @pytest.mark.asyncio
    async def test_create_conflict_propagates(self, client, transport):
        """Test transport errors pass through unchanged."""
        error = ConflictError("Document already exists")
        transport.error = error

        with pytest.raises(ConflictError) as exc_info:
            await client.create_document("shop", "orders", {"id": "doc1"})

        assert exc_info.value is error


class TestGetDocument:
    """Test get dispatch."""

    @pytest.mark.asyncio
    async def test_get_document(self, client, transport):
        """Test reading a document into a fresh mapping."""
        document = await client.get_document(
            "shop", "orders", "doc1", GetDocumentOptions(partition_key_value="p1")
        )

        assert document["name"] == "Widget"
        method, path, _, headers = transport.calls[0]
        assert method == "get"
        assert path == "dbs/shop/colls/orders/docs/doc1"
        assert headers == {HEADER_IF_NONE_MATCH: "false", HEADER_PARTITIONKEY: '["p1"]'}

    @pytest.mark.asyncio
    async def test_get_fills_out_in_place(self, client, transport):
        """Test the caller's mapping is filled and returned."""
        out = {"local": True}

        result = await client.get_document("shop", "orders", "doc1", out=out)

        assert result is out
        assert out["id"] == "doc1"
        assert out["local"] is True

    @pytest.mark.asyncio
    async def test_get_without_options(self, client, transport):
        """Test None options still send the conditional-read flag."""
        await client.get_document("shop", "orders", "doc1")

        assert transport.calls[0][3] == {HEADER_IF_NONE_MATCH: "false"}

    @pytest.mark.asyncio
    async def test_get_not_found_propagates(self, client, transport):
        """Test not found errors pass through."""
        transport.error = ResourceNotFoundError("Document not found")
        out = {}

        with pytest.raises(ResourceNotFoundError):
            await client.get_document("shop", "orders", "missing", out=out)

        assert out == {}


class TestReplaceDocument:
    """Test replace dispatch."""

    @pytest.mark.asyncio
    async def test_replace_with_if_match(self, client, transport):
        """Test replacing with an etag precondition."""
        resource = await client.replace_document(
            "shop", "orders", "doc1", {"id": "doc1"},
            ReplaceDocumentOptions(if_match="etag-123"),
        )

        assert resource.etag == '"etag-2"'
        method, path, _, headers = transport.calls[0]
        assert method == "replace"
        assert path == "dbs/shop/colls/orders/docs/doc1"
        assert headers[HEADER_IF_MATCH] == "etag-123"

    @pytest.mark.asyncio
    async def test_replace_without_if_match(self, client, transport):
        """Test no if-match header without an etag."""
        await client.replace_document("shop", "orders", "doc1", {"id": "doc1"})

        assert HEADER_IF_MATCH not in transport.calls[0][3]

    @pytest.mark.asyncio
    async def test_replace_precondition_failed(self, client, transport):
        """Test etag mismatches pass through."""
        transport.error = PreconditionFailedError("ETag mismatch")

        with pytest.raises(PreconditionFailedError):
            await client.replace_document(
                "shop", "orders", "doc1", {"id": "doc1"},
                ReplaceDocumentOptions(if_match="stale"),
            )


class TestDeleteDocument:
    """Test delete dispatch."""

    @pytest.mark.asyncio
    async def test_delete_document(self, client, transport):
        """Test deleting a document."""
        result = await client.delete_document(
            "shop", "orders", "doc1", DeleteDocumentOptions(partition_key_value="p1")
        )

        assert result is None
        assert transport.calls == [
            ("delete", "dbs/shop/colls/orders/docs/doc1", None, {HEADER_PARTITIONKEY: '["p1"]'})
        ]

    @pytest.mark.asyncio
    async def test_delete_without_options(self, client, transport):
        """Test None options send no headers."""
        await client.delete_document("shop", "orders", "doc1")

        assert transport.calls[0][3] == {}


class TestQueryDocuments:
    """Test query dispatch."""

    @pytest.mark.asyncio
    async def test_query_documents(self, client, transport):
        """Test a query extends the caller's list."""
        docs = [{"id": "earlier"}]
        query = Query(
            query="SELECT * FROM c WHERE c.customer = @customer",
            parameters=[QueryParameter(name="@customer", value="c1")],
        )

        response = await client.query_documents(
            "shop", "orders", query, docs, default_query_document_options()
        )

        assert response.documents is docs
        assert [d["id"] for d in docs] == ["earlier", "doc1", "doc2"]
        assert response.count == 2
        assert response.continuation == "token-2"
        assert response.has_more_results is True
        assert response.session_token == "0:1#42"
        assert response.request_charge == 2.5

        method, path, payload, headers = transport.calls[0]
        assert method == "query"
        assert path == "dbs/shop/colls/orders/docs"
        assert payload is query
        assert headers[HEADER_IS_QUERY] == "true"
        assert headers[HEADER_CONTENT_TYPE] == QUERY_CONTENT_TYPE

    @pytest.mark.asyncio
    async def test_query_without_options(self, client, transport):
        """Test None options fall back to the default query options."""
        response = await client.query_documents("shop", "orders", Query(query="SELECT * FROM c"))

        assert len(response.documents) == 2
        assert transport.calls[0][3] == {
            HEADER_IS_QUERY: "true",
            HEADER_CONTENT_TYPE: QUERY_CONTENT_TYPE,
        }

    @pytest.mark.asyncio
    async def test_query_wrong_content_type_never_reaches_transport(self, client, transport):
        """Test content type validation fails before any network call."""
        options = QueryDocumentsOptions(is_query=True, content_type="application/json")

        with pytest.raises(WrongQueryContentTypeError):
            await client.query_documents("shop", "orders", Query(query="SELECT * FROM c"), options=options)

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_query_zero_value_options_fail(self, client, transport):
        """Test explicitly empty query options still fail validation."""
        with pytest.raises(WrongQueryContentTypeError):
            await client.query_documents(
                "shop", "orders", Query(query="SELECT * FROM c"), options=QueryDocumentsOptions()
            )

        assert transport.calls == []


class TestNotImplemented:
    """Test declared but unsupported operations."""

    @pytest.mark.asyncio
    async def test_upsert_document(self, client, transport):
        """Test upsert always fails without a transport call."""
        with pytest.raises(OperationNotImplementedError) as exc_info:
            await client.upsert_document("shop", "orders", {"id": "doc1"}, UpsertDocumentOptions())

        assert exc_info.value.error_code == "NotImplemented"
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_list_documents(self, client, transport):
        """Test listing always fails without a transport call."""
        with pytest.raises(OperationNotImplementedError) as exc_info:
            await client.list_documents("shop", "orders")

        assert exc_info.value.operation == "list_documents"
        assert transport.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("args", [
        ("", "", None),
        ("shop", "orders", {"id": "x"}),
    ])
    async def test_upsert_ignores_arguments(self, client, transport, args):
        """Test the failure is identical regardless of input."""
        with pytest.raises(OperationNotImplementedError) as exc_info:
            await client.upsert_document(*args)

        assert str(exc_info.value) == "upsert_document is not implemented"
        assert transport.calls == []


class SlowTransport:
    """Transport whose get blocks until cancelled."""

    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False

    async def get(self, path, headers):
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return {}


class TestCancellation:
    """Test cancellation reaches the transport."""

    @pytest.mark.asyncio
    async def test_cancel_in_flight_get(self):
        """Test cancelling the caller cancels the transport exchange."""
        slow = SlowTransport()
        client = DocumentClient(slow)

        task = asyncio.create_task(client.get_document("shop", "orders", "doc1"))
        await slow.started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert slow.cancelled is True


class TestConcurrency:
    """Test concurrent calls share no state."""

    @pytest.mark.asyncio
    async def test_concurrent_calls(self, client, transport):
        """Test concurrent calls each get their own headers."""
        await asyncio.gather(*[
            client.delete_document("shop", "orders", f"doc{i}", DeleteDocumentOptions(partition_key_value=f"p{i}"))
            for i in range(10)
        ])

        assert len(transport.calls) == 10
        for _, path, _, headers in transport.calls:
            index = path.rsplit("doc", 1)[1]
            assert headers[HEADER_PARTITIONKEY] == f'["p{index}"]'
