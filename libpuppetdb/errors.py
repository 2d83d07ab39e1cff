"""Typed errors raised by queries, connectors, and the transport."""

from .constants import ErrorCode


class PuppetdbError(RuntimeError):
    """Base class for every error raised by libpuppetdb."""

    error_code = ErrorCode.PROCESSING_FAILED


class QueryError(PuppetdbError):
    """The query could not be built, e.g. no endpoint was given."""

    error_code = ErrorCode.INVALID_QUERY


class ConnectorError(PuppetdbError):
    """The connector configuration is unusable."""

    error_code = ErrorCode.INVALID_CONNECTION


class ProcessingError(PuppetdbError):
    """Performing the query failed at the transport level."""

    error_code = ErrorCode.PROCESSING_FAILED


class UrlEncodingError(ProcessingError):
    error_code = ErrorCode.URL_ENCODING_FAILED


__all__ = ["PuppetdbError", "QueryError", "ConnectorError", "ProcessingError", "UrlEncodingError"]
