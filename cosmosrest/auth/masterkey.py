"""
Master key authorization for the Cosmos DB REST API.

Every request carries an ``authorization`` header built from an HMAC-SHA256
signature over the verb, resource type, resource link and request date.

Reference: https://learn.microsoft.com/en-us/rest/api/cosmos-db/access-control-on-cosmosdb-resources

Author: LocalZure Team
Date: 2025-12-18
"""

import base64
import binascii
import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from cosmosrest.auth.exceptions import InvalidMasterKeyError

logger = logging.getLogger(__name__)

TOKEN_TYPE = "master"
TOKEN_VERSION = "1.0"


@dataclass
class MasterKeyCredentials:
    """Credentials for master key authorization."""
    
    master_key: str  # Base64-encoded
    
    def authorization(
        self,
        verb: str,
        resource_type: str,
        resource_link: str,
        date: str
    ) -> str:
        """Build the authorization header value for one request."""
        return generate_master_key_token(
            verb, resource_type, resource_link, date, self.master_key
        )


def format_request_date(moment: Optional[datetime] = None) -> str:
    """
    Format a timestamp the way the service expects in ``x-ms-date``.
    
    Args:
        moment: Timestamp to format (defaults to now, UTC)
    
    Returns:
        RFC 1123 date string, e.g. "Tue, 01 Nov 1994 08:12:31 GMT"
    """
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S GMT")


def build_string_to_sign(
    verb: str,
    resource_type: str,
    resource_link: str,
    date: str
) -> str:
    """
    Build the string signed for master key authorization.
    
    Format:
        verb\\n
        resourceType\\n
        resourceLink\\n
        date\\n
        \\n
    
    Verb, resource type and date are lowercased; the resource link keeps
    its case since identifiers are case-sensitive.
    """
    return (
        f"{verb.lower()}\n"
        f"{resource_type.lower()}\n"
        f"{resource_link}\n"
        f"{date.lower()}\n"
        "\n"
    )


def compute_signature(string_to_sign: str, master_key: str) -> str:
    """
    Compute HMAC-SHA256 signature.
    
    Signature = Base64(HMAC-SHA256(UTF8(StringToSign), Base64Decode(MasterKey)))
    
    Args:
        string_to_sign: String built by build_string_to_sign
        master_key: Base64-encoded master key
    
    Returns:
        Base64-encoded signature
    
    Raises:
        InvalidMasterKeyError: If the key is not valid Base64
    """
    try:
        key_bytes = base64.b64decode(master_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidMasterKeyError() from e
    
    signature_bytes = hmac.new(
        key_bytes,
        string_to_sign.encode("utf-8"),
        hashlib.sha256
    ).digest()
    
    return base64.b64encode(signature_bytes).decode("utf-8")


def generate_master_key_token(
    verb: str,
    resource_type: str,
    resource_link: str,
    date: str,
    master_key: str
) -> str:
    """
    Generate the URL-encoded authorization token for a request.
    
    Returns:
        ``type=master&ver=1.0&sig=<signature>``, URL-encoded
    """
    string_to_sign = build_string_to_sign(verb, resource_type, resource_link, date)
    signature = compute_signature(string_to_sign, master_key)
    token = f"type={TOKEN_TYPE}&ver={TOKEN_VERSION}&sig={signature}"
    return quote(token, safe="")
