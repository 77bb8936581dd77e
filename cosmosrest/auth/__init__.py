"""
Authentication Module.

Provides master key request signing for the Cosmos DB REST API.

Author: LocalZure Team
Date: 2025-12-18
"""

from cosmosrest.auth.exceptions import (
    AuthenticationError,
    InvalidMasterKeyError,
    MissingMasterKeyError,
)
from cosmosrest.auth.masterkey import (
    MasterKeyCredentials,
    build_string_to_sign,
    compute_signature,
    format_request_date,
    generate_master_key_token,
)

__all__ = [
    # Exceptions
    "AuthenticationError",
    "InvalidMasterKeyError",
    "MissingMasterKeyError",
    # Master key auth
    "MasterKeyCredentials",
    "build_string_to_sign",
    "compute_signature",
    "format_request_date",
    "generate_master_key_token",
]
