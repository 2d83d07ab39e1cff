import argparse
import sys

from .connector import PuppetdbConnector
from .constants import VERSION_STRING, ApiVersion
from .errors import ConnectorError, ProcessingError, QueryError
from .query import Query

EXIT_OK = 0
EXIT_CONNECTOR_ERROR = 2
EXIT_QUERY_ERROR = 3
EXIT_PROCESSING_ERROR = 4


def _write_result(result: str) -> None:
    # Bodies may carry surrogate-escaped bytes; write them back out unchanged.
    sys.stdout.flush()
    sys.stdout.buffer.write(result.encode("utf-8", errors="surrogateescape") + b"\n")
    sys.stdout.buffer.flush()


def _uses_tls(args) -> bool:
    return any(value is not None for value in (args.ca_cert, args.client_cert, args.client_key))


def build_connector(args) -> PuppetdbConnector:
    """Build a plain or TLS connector from parsed arguments."""
    if _uses_tls(args):
        return PuppetdbConnector.with_tls(
            args.hostname,
            args.ca_cert or "",
            args.client_cert or "",
            args.client_key or "",
            port=args.port,
            api_version=args.api_version,
            file_path=args.config,
        )

    return PuppetdbConnector(args.hostname, args.port, args.api_version, file_path=args.config)


def run_query(args) -> int:
    """Handle a single query and return the process exit code."""
    try:
        connector = build_connector(args)
    except ConnectorError as e:
        print(f"Failed to initialize the connector: {e}", file=sys.stderr)
        return EXIT_CONNECTOR_ERROR

    try:
        query = Query(args.endpoint, args.query_string)
    except QueryError as e:
        print(f"Failed to initialize the query: {e}", file=sys.stderr)
        return EXIT_QUERY_ERROR

    try:
        result = connector.perform_query(query)
    except ProcessingError as e:
        print(f"Failed to perform the query: {e}", file=sys.stderr)
        if connector.get_performed_query_url():
            print(f"Performed query: {connector.get_performed_query_url()}", file=sys.stderr)
        return EXIT_PROCESSING_ERROR

    _write_result(result)
    print(f"Performed query: {connector.get_performed_query_url()}", file=sys.stderr)
    return EXIT_OK


def main():
    parser = argparse.ArgumentParser(description="Run a single PuppetDB query and print the raw JSON result")
    parser.add_argument("hostname", help="PuppetDB hostname")
    parser.add_argument("endpoint", help="PuppetDB endpoint, e.g. nodes or facts")
    parser.add_argument("query_string", nargs="?", default="", help="PuppetDB query expression (not URL-encoded)")
    parser.add_argument("--port", type=int, default=None, help="PuppetDB port (default: 8080, or 8081 with TLS)")
    parser.add_argument(
        "--api-version",
        choices=[version.value for version in ApiVersion],
        default=None,
        help="PuppetDB API version (default: v4)",
    )
    parser.add_argument("--ca-cert", help="CA certificate path; enables TLS")
    parser.add_argument("--client-cert", help="Client certificate path; enables TLS")
    parser.add_argument("--client-key", help="Client private key path; enables TLS")
    parser.add_argument("--config", help="Path to connector JSON/YAML config")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION_STRING}")

    args = parser.parse_args()
    sys.exit(run_query(args))


if __name__ == "__main__":
    main()
