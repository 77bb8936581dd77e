"""
Shared fixtures for document client tests.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from cosmosrest.documents.models import Query, QueryPage


class RecordingTransport:
    """Transport double recording every call it receives.
    
    Attributes:
        calls: (method, path, payload, headers) per call, in order
        responses: Canned return value per method
        error: Exception raised by every call when set
    """
    
    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, Any, Dict[str, str]]] = []
        self.responses: Dict[str, Any] = {
            "create": {"id": "doc1", "_rid": "rid1", "_etag": '"etag-1"', "_ts": 1700000000},
            "get": {"id": "doc1", "_etag": '"etag-1"', "name": "Widget"},
            "replace": {"id": "doc1", "_rid": "rid1", "_etag": '"etag-2"', "_ts": 1700000100},
            "query": QueryPage(
                documents=[{"id": "doc1"}, {"id": "doc2"}],
                count=2,
                continuation="token-2",
                session_token="0:1#42",
                request_charge=2.5,
                activity_id="activity-1",
            ),
        }
        self.error: Optional[Exception] = None
        self.closed = False
    
    def _record(self, method: str, path: str, payload: Any, headers: Mapping[str, str]) -> Any:
        self.calls.append((method, path, payload, dict(headers)))
        if self.error is not None:
            raise self.error
        return self.responses.get(method)
    
    async def create(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        return self._record("create", path, body, headers)
    
    async def get(self, path: str, headers: Mapping[str, str]) -> Dict[str, Any]:
        return self._record("get", path, None, headers)
    
    async def replace(self, path: str, body: Any, headers: Mapping[str, str]) -> Dict[str, Any]:
        return self._record("replace", path, body, headers)
    
    async def delete(self, path: str, headers: Mapping[str, str]) -> None:
        self._record("delete", path, None, headers)
    
    async def query(self, path: str, query: Query, headers: Mapping[str, str]) -> QueryPage:
        return self._record("query", path, query, headers)
    
    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def transport():
    """Create a fresh recording transport for each test."""
    return RecordingTransport()
