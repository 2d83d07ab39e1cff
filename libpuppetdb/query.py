"""PuppetDB query value: an endpoint plus an optional raw query string."""

from .constants import ErrorCode
from .errors import QueryError


class Query:
    """An endpoint (e.g. ``nodes``) and an optional PuppetDB query expression.

    The query string is stored verbatim. It is expected raw, not URL-encoded:
    the connector percent-encodes it when it builds the request URL.
    """

    def __init__(self, endpoint: str, query_string: str = ""):
        if not endpoint:
            raise QueryError("no endpoint specified")

        self._endpoint = endpoint
        self._query_string = query_string or ""
        self._error_code = ErrorCode.OK

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def query_string(self) -> str:
        return self._query_string

    @property
    def error_code(self) -> ErrorCode:
        """Outcome of the last perform_query call made with this query."""
        return self._error_code

    @error_code.setter
    def error_code(self, value: ErrorCode) -> None:
        self._error_code = value

    def get_endpoint(self) -> str:
        return self._endpoint

    def get_query_string(self) -> str:
        return self._query_string

    def is_valid(self) -> bool:
        return bool(self._endpoint)

    def format(self) -> str:
        """Return ``endpoint`` or ``endpoint?query=<query string>`` without encoding."""
        if not self._query_string:
            return self._endpoint
        return f"{self._endpoint}?query={self._query_string}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Query(endpoint={self._endpoint!r}, query_string={self._query_string!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Query):
            return NotImplemented
        return (self._endpoint, self._query_string) == (other._endpoint, other._query_string)

    def __hash__(self) -> int:
        return hash((self._endpoint, self._query_string))
