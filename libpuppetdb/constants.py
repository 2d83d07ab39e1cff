"""Version, ports, and API version tokens."""

from enum import Enum, IntEnum
from types import MappingProxyType

VERSION_STRING = "0.2.0"

PUPPETDB_HTTP_PORT = 8080
PUPPETDB_SECURE_PORT = 8081


class ApiVersion(str, Enum):
    v2 = "v2"
    v3 = "v3"
    v4 = "v4"


API_VERSION_PATHS = MappingProxyType(
    {
        ApiVersion.v2: "v2",
        ApiVersion.v3: "v3",
        ApiVersion.v4: "v4",
    }
)
API_VERSION_DEFAULT = ApiVersion.v4


# Query status codes; they start at 100 so they never overlap HTTP status codes.
class ErrorCode(IntEnum):
    OK = 100
    INVALID_CONNECTION = 101
    INVALID_QUERY = 102
    URL_ENCODING_FAILED = 103
    PROCESSING_FAILED = 104
