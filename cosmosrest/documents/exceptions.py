"""
Document API Exceptions.

Exception classes raised by the document client, matching Azure Cosmos DB
error codes where the service defines one.

Author: LocalZure Team
Date: 2025-12-18
"""

from typing import Any, Dict, Mapping, Optional, Type


class CosmosClientError(Exception):
    """Base exception for document client errors.
    
    Attributes:
        message: Error message
        error_code: Azure Cosmos DB error code
    """
    
    def __init__(self, message: str, error_code: str = "InternalServerError"):
        """Initialize client error.
        
        Args:
            message: Error message
            error_code: Azure error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(CosmosClientError):
    """Caller-supplied options violate a protocol rule.
    
    Raised locally, before any request reaches the transport.
    """
    
    def __init__(self, message: str, error_code: str = "BadConfiguration"):
        super().__init__(message, error_code)


class WrongQueryContentTypeError(ConfigurationError):
    """Query options carry a content type other than the query media type."""
    
    def __init__(self, content_type: str, expected: str):
        """Initialize content type mismatch error.
        
        Args:
            content_type: Content type found on the options
            expected: The only accepted content type
        """
        super().__init__(
            f"Wrong query content type '{content_type}', expected '{expected}'",
            "WrongQueryContentType"
        )
        self.content_type = content_type
        self.expected = expected


class OperationNotImplementedError(CosmosClientError):
    """Operation is declared on the client but not supported yet."""
    
    def __init__(self, operation: str):
        super().__init__(f"{operation} is not implemented", "NotImplemented")
        self.operation = operation


class CosmosTransportError(CosmosClientError):
    """Network fault while talking to the service."""
    
    def __init__(self, message: str):
        super().__init__(message, "ServiceUnavailable")


class CosmosHTTPError(CosmosClientError):
    """The service answered with an error status.
    
    Attributes:
        status_code: HTTP status code
        activity_id: Service activity id of the failed request
    """
    
    status_code: int = 500
    default_error_code: str = "InternalServerError"
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        activity_id: Optional[str] = None
    ):
        super().__init__(message, error_code or self.default_error_code)
        if status_code is not None:
            self.status_code = status_code
        self.activity_id = activity_id


class NotModifiedError(CosmosHTTPError):
    """Conditional read matched the current entity tag (304)."""
    status_code = 304
    default_error_code = "NotModified"


class BadRequestError(CosmosHTTPError):
    """Bad request error (400)."""
    status_code = 400
    default_error_code = "BadRequest"


class UnauthorizedError(CosmosHTTPError):
    """Authorization token rejected (401)."""
    status_code = 401
    default_error_code = "Unauthorized"


class ForbiddenError(CosmosHTTPError):
    """Request not permitted (403)."""
    status_code = 403
    default_error_code = "Forbidden"


class ResourceNotFoundError(CosmosHTTPError):
    """Resource not found (404)."""
    status_code = 404
    default_error_code = "NotFound"


class ConflictError(CosmosHTTPError):
    """Resource already exists (409)."""
    status_code = 409
    default_error_code = "Conflict"


class PreconditionFailedError(CosmosHTTPError):
    """Precondition failed error (ETag mismatch, 412)."""
    status_code = 412
    default_error_code = "PreconditionFailed"


class RequestEntityTooLargeError(CosmosHTTPError):
    """Document exceeds the service size limit (413)."""
    status_code = 413
    default_error_code = "RequestEntityTooLarge"


class TooManyRequestsError(CosmosHTTPError):
    """Request rate too large (429)."""
    status_code = 429
    default_error_code = "TooManyRequests"


_STATUS_ERRORS: Dict[int, Type[CosmosHTTPError]] = {
    cls.status_code: cls
    for cls in (
        NotModifiedError,
        BadRequestError,
        UnauthorizedError,
        ForbiddenError,
        ResourceNotFoundError,
        ConflictError,
        PreconditionFailedError,
        RequestEntityTooLargeError,
        TooManyRequestsError,
    )
}


def raise_for_status(
    status_code: int,
    body: Any = None,
    activity_id: Optional[str] = None
) -> None:
    """
    Raise the matching CosmosHTTPError for a non-success response.
    
    Args:
        status_code: HTTP status code of the response
        body: Decoded response body (the service sends {"code", "message"})
        activity_id: Value of the activity id response header
    
    Raises:
        CosmosHTTPError: If the status is 304 or >= 400
    """
    if status_code < 400 and status_code != 304:
        return
    
    error_code: Optional[str] = None
    message = f"Request failed with status {status_code}"
    if isinstance(body, Mapping):
        error_code = body.get("code") or None
        message = body.get("message") or body.get("detail") or message
    
    error_class = _STATUS_ERRORS.get(status_code, CosmosHTTPError)
    raise error_class(
        str(message),
        error_code=error_code,
        status_code=status_code,
        activity_id=activity_id
    )
