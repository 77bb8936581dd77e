"""
Document Client.

Dispatches document operations to a transport: translates the operation's
options into request headers, builds the resource link and hands both to
the matching transport call. Errors raised by the transport propagate
unchanged.

Author: LocalZure Team
Date: 2025-12-18
"""

import logging
from typing import Any, Dict, List, MutableMapping, Optional

from cosmosrest.core.logging_config import get_logger, log_with_context

from .addressing import doc_link, docs_link
from .exceptions import OperationNotImplementedError
from .models import Query, QueryDocumentsResponse, Resource
from .options import (
    CreateDocumentOptions,
    DeleteDocumentOptions,
    DocumentOptions,
    GetDocumentOptions,
    QueryDocumentsOptions,
    ReplaceDocumentOptions,
    UpsertDocumentOptions,
    default_query_document_options,
)
from .transport import DocumentTransport

logger = get_logger(__name__)


class DocumentClient:
    """Client for Cosmos DB document operations.

    The client holds no state besides its transport; concurrent calls share
    nothing mutable. Passing ``None`` as options is the same as passing the
    operation's default options.

    Attributes:
        transport: Transport performing the network exchanges
    """

    def __init__(self, transport: DocumentTransport) -> None:
        """Initialize document client.

        Args:
            transport: Transport used for every operation
        """
        self.transport = transport

    def _headers(self, operation: str, path: str, options: DocumentOptions) -> Dict[str, str]:
        headers = options.as_headers()
        log_with_context(
            logger, logging.DEBUG, f"Dispatching {operation}",
            operation=operation, path=path, headers=sorted(headers)
        )
        return headers

    async def create_document(
        self,
        database: str,
        collection: str,
        document: Any,
        options: Optional[CreateDocumentOptions] = None
    ) -> Resource:
        """Create a document in a collection.

        Args:
            database: Database identifier
            collection: Collection identifier
            document: Document body (dict or pydantic model)
            options: Create options; None sends only the
                is-upsert flag, as "false"

        Returns:
            System properties of the stored document
        """
        path = docs_link(database, collection)
        if options is None:
            options = CreateDocumentOptions()
        headers = self._headers("create_document", path, options)

        stored = await self.transport.create(path, document, headers)
        return Resource.model_validate(stored)

    async def upsert_document(
        self,
        database: str,
        collection: str,
        document: Any,
        options: Optional[UpsertDocumentOptions] = None
    ) -> Resource:
        """Upsert a document.

        Not supported yet; use create_document with is_upsert=True.

        Raises:
            OperationNotImplementedError: Always
        """
        raise OperationNotImplementedError("upsert_document")

    async def list_documents(
        self,
        database: str,
        collection: str,
        options: Optional[DocumentOptions] = None,
        out: Optional[List[Any]] = None
    ) -> QueryDocumentsResponse:
        """Read all documents or the change feed of a collection.

        Not supported yet.

        Raises:
            OperationNotImplementedError: Always
        """
        # TODO: thread the change feed continuation token through the response
        raise OperationNotImplementedError("list_documents")

    async def get_document(
        self,
        database: str,
        collection: str,
        document_id: str,
        options: Optional[GetDocumentOptions] = None,
        out: Optional[MutableMapping[str, Any]] = None
    ) -> MutableMapping[str, Any]:
        """Read a single document.

        Args:
            database: Database identifier
            collection: Collection identifier
            document_id: Document identifier
            options: Read options
            out: Mapping filled in place with the document (a new dict if omitted)

        Returns:
            The filled mapping
        """
        path = doc_link(database, collection, document_id)
        if options is None:
            options = GetDocumentOptions()
        headers = self._headers("get_document", path, options)

        body = await self.transport.get(path, headers)
        if out is None:
            out = {}
        out.update(body)
        return out

    async def replace_document(
        self,
        database: str,
        collection: str,
        document_id: str,
        document: Any,
        options: Optional[ReplaceDocumentOptions] = None
    ) -> Resource:
        """Replace a whole document.

        Args:
            database: Database identifier
            collection: Collection identifier
            document_id: Document identifier
            document: New document body
            options: Replace options (if_match for optimistic concurrency)

        Returns:
            System properties of the stored document
        """
        path = doc_link(database, collection, document_id)
        if options is None:
            options = ReplaceDocumentOptions()
        headers = self._headers("replace_document", path, options)

        stored = await self.transport.replace(path, document, headers)
        return Resource.model_validate(stored)

    async def delete_document(
        self,
        database: str,
        collection: str,
        document_id: str,
        options: Optional[DeleteDocumentOptions] = None
    ) -> None:
        """Delete a document.

        Args:
            database: Database identifier
            collection: Collection identifier
            document_id: Document identifier
            options: Delete options
        """
        path = doc_link(database, collection, document_id)
        if options is None:
            options = DeleteDocumentOptions()
        headers = self._headers("delete_document", path, options)

        await self.transport.delete(path, headers)

    async def query_documents(
        self,
        database: str,
        collection: str,
        query: Query,
        documents: Optional[List[Any]] = None,
        options: Optional[QueryDocumentsOptions] = None
    ) -> QueryDocumentsResponse:
        """Query the documents of a collection.

        Returns one page of results; pass the response's continuation back
        through the options to fetch the next page.

        Args:
            database: Database identifier
            collection: Collection identifier
            query: SQL query
            documents: List extended in place with the page's documents
            options: Query options (defaults to default_query_document_options())

        Returns:
            Response wrapping ``documents`` and the paging metadata

        Raises:
            WrongQueryContentTypeError: If options carry another content type
        """
        path = docs_link(database, collection)
        if options is None:
            options = default_query_document_options()
        headers = self._headers("query_documents", path, options)

        page = await self.transport.query(path, query, headers)

        if documents is None:
            documents = []
        documents.extend(page.documents)

        return QueryDocumentsResponse(
            documents=documents,
            count=page.count,
            continuation=page.continuation,
            session_token=page.session_token,
            request_charge=page.request_charge,
            activity_id=page.activity_id,
        )
