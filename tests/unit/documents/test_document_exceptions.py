"""
Unit tests for document client exceptions.

Author: LocalZure Team
Date: 2025-12-18
"""

import pytest

from cosmosrest.documents.exceptions import (
    ConfigurationError,
    ConflictError,
    CosmosClientError,
    CosmosHTTPError,
    OperationNotImplementedError,
    TooManyRequestsError,
    UnauthorizedError,
    WrongQueryContentTypeError,
    raise_for_status,
)


class TestHierarchy:
    """Test exception classification."""
    
    def test_configuration_error_is_client_error(self):
        """Test configuration errors share the client base class."""
        error = WrongQueryContentTypeError("text/plain", "application/query+json")
        
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, CosmosClientError)
        assert not isinstance(error, CosmosHTTPError)
        assert "text/plain" in str(error)
    
    def test_not_implemented_is_distinct(self):
        """Test not-implemented is its own kind."""
        error = OperationNotImplementedError("list_documents")
        
        assert not isinstance(error, (ConfigurationError, CosmosHTTPError))
        assert error.error_code == "NotImplemented"
    
    def test_http_error_defaults(self):
        """Test default codes of status errors."""
        error = ConflictError("exists")
        
        assert error.status_code == 409
        assert error.error_code == "Conflict"
        assert error.activity_id is None


class TestRaiseForStatus:
    """Test response status mapping."""
    
    @pytest.mark.parametrize("status_code", [200, 201, 204])
    def test_success_does_not_raise(self, status_code):
        """Test success statuses pass."""
        raise_for_status(status_code, {"id": "doc1"})
    
    def test_unauthorized(self):
        """Test 401 mapping with the service error body."""
        with pytest.raises(UnauthorizedError) as exc_info:
            raise_for_status(401, {"code": "Unauthorized", "message": "bad signature"})
        
        assert exc_info.value.message == "bad signature"
    
    def test_throttled(self):
        """Test 429 mapping."""
        with pytest.raises(TooManyRequestsError) as exc_info:
            raise_for_status(429, None, activity_id="a-1")
        
        assert exc_info.value.error_code == "TooManyRequests"
        assert exc_info.value.activity_id == "a-1"
    
    def test_emulator_detail_body(self):
        """Test FastAPI-style error bodies from the emulator."""
        with pytest.raises(CosmosHTTPError) as exc_info:
            raise_for_status(409, {"detail": "Document with id 'x' already exists"})
        
        assert isinstance(exc_info.value, ConflictError)
        assert "already exists" in exc_info.value.message
    
    def test_unknown_status(self):
        """Test unmapped statuses keep their code."""
        with pytest.raises(CosmosHTTPError) as exc_info:
            raise_for_status(502, "Bad Gateway")
        
        assert type(exc_info.value) is CosmosHTTPError
        assert exc_info.value.status_code == 502
