"""Synchronous PuppetDB query client returning raw JSON text.

Create a PuppetdbConnector (plain or with mutual TLS) and call
perform_query() with Query instances. The API version only selects the
URL path segment; the caller supplies an endpoint valid for that version
and processes the returned JSON.
"""

from .config import ConnectorConfig, TLSConfig
from .connector import PuppetdbConnector, file_exists
from .constants import (
    API_VERSION_DEFAULT,
    API_VERSION_PATHS,
    PUPPETDB_HTTP_PORT,
    PUPPETDB_SECURE_PORT,
    VERSION_STRING,
    ApiVersion,
    ErrorCode,
)
from .errors import ConnectorError, ProcessingError, PuppetdbError, QueryError, UrlEncodingError
from .query import Query
from .transport import RequestsTransport, Transport, TransportResponse

__version__ = VERSION_STRING

__all__ = [
    "__version__",
    "VERSION_STRING",
    "PUPPETDB_HTTP_PORT",
    "PUPPETDB_SECURE_PORT",
    "ApiVersion",
    "API_VERSION_PATHS",
    "API_VERSION_DEFAULT",
    "ErrorCode",
    "PuppetdbError",
    "QueryError",
    "ConnectorError",
    "ProcessingError",
    "UrlEncodingError",
    "ConnectorConfig",
    "TLSConfig",
    "Query",
    "PuppetdbConnector",
    "file_exists",
    "Transport",
    "TransportResponse",
    "RequestsTransport",
]
