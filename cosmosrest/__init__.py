"""
cosmosrest: Cosmos DB document REST client

Translates document operation options into Cosmos DB REST API headers and
dispatches create, read, replace, delete and query calls to a transport.
"""

__version__ = "0.1.0"
__author__ = "Ayodele Oladeji"

from .documents.client import DocumentClient
from .documents.transport import HttpTransport

__all__ = ["DocumentClient", "HttpTransport", "__version__"]
