import io
import sys
from unittest.mock import MagicMock, patch

from libpuppetdb import ConnectorError, ProcessingError
from libpuppetdb.cli import main


def _run_cli(argv, connector=None, connector_error=None, tls_connector=None):
    connector_ctor = MagicMock(return_value=connector)
    if connector_error is not None:
        connector_ctor.side_effect = connector_error
    connector_ctor.with_tls.return_value = tls_connector

    captured_stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")

    with patch("libpuppetdb.cli.PuppetdbConnector", connector_ctor), \
         patch("sys.stdout", captured_stdout), \
         patch("sys.stderr.write") as mock_stderr, \
         patch("sys.exit") as mock_exit:
        sys.argv = ["libpuppetdb", *argv]
        main()

    captured_stdout.flush()
    stdout = captured_stdout.buffer.getvalue()
    stderr = "".join(call.args[0] for call in mock_stderr.call_args_list)
    return connector_ctor, stdout, stderr, mock_exit


def test_cli_query_success():
    connector = MagicMock()
    connector.perform_query.return_value = '[{"certname": "master"}]'
    connector.get_performed_query_url.return_value = "http://localhost:8080/v3/nodes?query=x"

    connector_ctor, stdout, stderr, mock_exit = _run_cli(
        ["localhost", "nodes", '["=", "name", "master"]', "--api-version", "v3"],
        connector=connector,
    )

    connector_ctor.assert_called_once_with("localhost", None, "v3", file_path=None)
    query = connector.perform_query.call_args.args[0]
    assert query.get_endpoint() == "nodes"
    assert query.get_query_string() == '["=", "name", "master"]'
    assert stdout == b'[{"certname": "master"}]\n'
    assert "Performed query: http://localhost:8080/v3/nodes?query=x" in stderr
    mock_exit.assert_called_once_with(0)


def test_cli_certificate_options_select_tls():
    connector = MagicMock()
    connector.perform_query.return_value = "[]"
    connector.get_performed_query_url.return_value = "https://master:8081/v4/facts"

    connector_ctor, _stdout, _stderr, mock_exit = _run_cli(
        ["master", "facts", "--ca-cert", "ca.pem", "--client-cert", "host.pem", "--client-key", "host.key"],
        tls_connector=connector,
    )

    connector_ctor.assert_not_called()
    connector_ctor.with_tls.assert_called_once_with(
        "master", "ca.pem", "host.pem", "host.key", port=None, api_version=None, file_path=None
    )
    mock_exit.assert_called_once_with(0)


def test_cli_connector_error_exit_code():
    _ctor, _stdout, stderr, mock_exit = _run_cli(["", "facts"], connector_error=ConnectorError("no hostname specified"))

    assert "Failed to initialize the connector: no hostname specified" in stderr
    mock_exit.assert_called_once_with(2)


def test_cli_query_error_exit_code():
    _ctor, _stdout, stderr, mock_exit = _run_cli(["localhost", ""], connector=MagicMock())

    assert "Failed to initialize the query: no endpoint specified" in stderr
    mock_exit.assert_called_once_with(3)


def test_cli_processing_error_exit_code():
    connector = MagicMock()
    connector.perform_query.side_effect = ProcessingError("Connection refused")
    connector.get_performed_query_url.return_value = "http://localhost:8080/v4/facts"

    _ctor, _stdout, stderr, mock_exit = _run_cli(["localhost", "facts"], connector=connector)

    assert "Failed to perform the query: Connection refused" in stderr
    mock_exit.assert_called_once_with(4)


def test_cli_writes_non_utf8_body_verbatim():
    connector = MagicMock()
    connector.perform_query.return_value = b'["caf\xe9"]'.decode("utf-8", errors="surrogateescape")
    connector.get_performed_query_url.return_value = "http://localhost:8080/v4/facts"

    _ctor, stdout, _stderr, mock_exit = _run_cli(["localhost", "facts"], connector=connector)

    assert stdout == b'["caf\xe9"]\n'
    mock_exit.assert_called_once_with(0)


def test_cli_writes_non_utf8_body_from_transport():
    response = MagicMock(status_code=200, content=b'["caf\xe9"]')
    session = MagicMock()
    session.get.return_value = response
    captured_stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")

    with patch("libpuppetdb.transport.requests.Session") as session_ctor, \
         patch("sys.stdout", captured_stdout), \
         patch("sys.stderr.write"), \
         patch("sys.exit") as mock_exit:
        session_ctor.return_value.__enter__.return_value = session
        sys.argv = ["libpuppetdb", "localhost", "facts"]
        main()

    captured_stdout.flush()
    assert captured_stdout.buffer.getvalue() == b'["caf\xe9"]\n'
    mock_exit.assert_called_once_with(0)
