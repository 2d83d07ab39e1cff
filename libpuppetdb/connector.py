"""PuppetDB connector: builds query URLs and performs blocking requests."""

import os
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from ._config import load_connection_config
from ._logging import get_logger
from .config import ConnectorConfig, TLSConfig
from .constants import API_VERSION_PATHS, PUPPETDB_HTTP_PORT, PUPPETDB_SECURE_PORT, ApiVersion, ErrorCode
from .errors import ConnectorError, PuppetdbError, QueryError
from .query import Query
from .transport import RequestsTransport, Transport


def file_exists(file_path: str) -> bool:
    if not file_path:
        return False
    return Path(file_path).is_file() and os.access(file_path, os.R_OK)


class PuppetdbConnector:
    """Holds PuppetDB connection parameters and performs queries against it.

    A connector is reusable for any number of sequential queries. It is not
    safe to share between threads, since the performed query URL is updated
    in place.

    Settings come only from the arguments, ``config`` and ``file_path``
    unless ``env_prefix`` is given (e.g. ``"PUPPETDB"`` to read
    ``PUPPETDB_HOSTNAME``, ``PUPPETDB_PORT``, ...).
    """

    def __init__(
        self,
        hostname: str | None = None,
        port: int | None = None,
        api_version: ApiVersion | str | None = None,
        *,
        ca_cert_path: str | None = None,
        client_cert_path: str | None = None,
        client_key_path: str | None = None,
        secure: bool = False,
        transport: Transport | None = None,
        url_builder: Callable[[Query], str] | None = None,
        config: dict | None = None,
        file_path: str | None = None,
        env_prefix: str | None = None,
    ):
        self.logger = get_logger("connector")
        self._transport = transport or RequestsTransport()
        self._url_builder = url_builder
        self._is_secure = secure
        self._performed_query_url = ""

        merged_config = load_connection_config(
            config,
            file_path=file_path,
            env_prefix=env_prefix,
            required=("hostname",),
            defaults={"port": PUPPETDB_SECURE_PORT if secure else PUPPETDB_HTTP_PORT},
            overrides={
                "hostname": hostname,
                "port": port,
                "api_version": api_version,
                "ca_cert_path": ca_cert_path,
                "client_cert_path": client_cert_path,
                "client_key_path": client_key_path,
            },
        )
        self.config = self._validate_config(merged_config)
        self._tls = self._build_tls_config() if secure else None

        self.logger.info(
            "PuppetDB connector ready host=%s port=%s api_version=%s secure=%s",
            self.config.hostname,
            self.config.port,
            self.config.api_version.value,
            secure,
        )

    @classmethod
    def with_tls(
        cls,
        hostname: str | None,
        ca_cert_path: str | None,
        client_cert_path: str | None,
        client_key_path: str | None,
        port: int | None = None,
        api_version: ApiVersion | str | None = None,
        **kwargs: Any,
    ) -> "PuppetdbConnector":
        """Build a connector that uses mutual TLS (default port 8081)."""
        return cls(
            hostname,
            port,
            api_version,
            ca_cert_path=ca_cert_path,
            client_cert_path=client_cert_path,
            client_key_path=client_key_path,
            secure=True,
            **kwargs,
        )

    @property
    def hostname(self) -> str:
        return self.config.hostname

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def api_version(self) -> ApiVersion:
        return self.config.api_version

    @property
    def tls(self) -> TLSConfig | None:
        return self._tls

    @property
    def performed_query_url(self) -> str:
        return self._performed_query_url

    def is_secure(self) -> bool:
        return self._is_secure

    def get_performed_query_url(self) -> str:
        return self._performed_query_url

    def get_query_url(self, query: Query) -> str:
        """Return ``{scheme}://{host}:{port}/{version}/{endpoint}[?query=...]``.

        The query string is percent-encoded by the transport; raises
        UrlEncodingError when that fails.
        """
        if self._url_builder is not None:
            return self._url_builder(query)

        protocol = "https" if self.is_secure() else "http"
        endpoint_and_query = query.get_endpoint()
        query_string = query.get_query_string()

        if query_string:
            endpoint_and_query += "?query=" + self._transport.escape(query_string)

        return f"{protocol}://{self.config.hostname}:{self.config.port}/{self._get_api_version()}/{endpoint_and_query}"

    def perform_query(self, query: Query) -> str:
        """Return the raw PuppetDB response body for ``query``.

        Raises ProcessingError (or UrlEncodingError) on failure. HTTP error
        statuses are not treated as failures.
        """
        if not query.is_valid():
            raise QueryError("no endpoint specified")
        return self._setup_and_perform(query)

    def _setup_and_perform(self, query: Query) -> str:
        try:
            url = self.get_query_url(query)
            self._performed_query_url = url
            self.logger.info("Performing PuppetDB query url=%s", url)
            response = self._transport.execute(url, self._tls)
        except PuppetdbError as exc:
            query.error_code = exc.error_code
            raise

        query.error_code = ErrorCode.OK
        self.logger.info("PuppetDB query returned status=%s bytes=%s", response.status_code, len(response.body))
        return response.body

    def _get_api_version(self) -> str:
        return API_VERSION_PATHS[self.config.api_version]

    def _validate_config(self, merged_config: dict[str, Any]) -> ConnectorConfig:
        try:
            return ConnectorConfig.model_validate(merged_config)
        except ValidationError as exc:
            raise ConnectorError(f"invalid connector configuration: {exc}") from exc

    def _build_tls_config(self) -> TLSConfig:
        if not self._transport.supports_tls():
            raise ConnectorError("transport is not TLS enabled")

        certificates = self.config.certificate_paths()
        if not all(certificates):
            raise ConnectorError("not all certificates were specified")

        for cert in certificates:
            if not file_exists(cert):
                raise ConnectorError(f"invalid certificate file: {cert}")

        ca_cert_path, client_cert_path, client_key_path = certificates
        return TLSConfig(
            ca_cert_path=ca_cert_path,
            client_cert_path=client_cert_path,
            client_key_path=client_key_path,
        )


__all__ = ["PuppetdbConnector", "file_exists"]
