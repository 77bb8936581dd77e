"""
Authentication exceptions for the document client.

Author: LocalZure Team
Date: 2025-12-18
"""


class AuthenticationError(Exception):
    """Base exception for authentication errors."""
    
    def __init__(self, message: str, error_code: str = "AuthenticationFailed"):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class InvalidMasterKeyError(AuthenticationError):
    """Raised when the master key is not valid Base64."""
    
    def __init__(self, message: str = "Master key must be a Base64-encoded string"):
        super().__init__(message, "InvalidMasterKey")


class MissingMasterKeyError(AuthenticationError):
    """Raised when a request must be signed but no master key is configured."""
    
    def __init__(self, message: str = "No master key configured"):
        super().__init__(message, "MissingMasterKey")
