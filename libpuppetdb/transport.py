"""Blocking HTTP(S) transport built on requests."""

from typing import Protocol

import requests
from pydantic import BaseModel, ConfigDict, Field
from urllib3.util import ssl_ as urllib3_ssl

from ._logging import get_logger
from .config import TLSConfig
from .errors import ProcessingError, UrlEncodingError


class TransportResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: str
    status_code: int = Field(ge=0)


class Transport(Protocol):
    def supports_tls(self) -> bool: ...

    def escape(self, value: str) -> str: ...

    def execute(self, url: str, tls: TLSConfig | None = None) -> TransportResponse: ...


class RequestsTransport:
    """Performs one GET per call on a fresh requests session."""

    def __init__(self):
        self.logger = get_logger("transport")

    def supports_tls(self) -> bool:
        return getattr(urllib3_ssl, "SSLContext", None) is not None

    def escape(self, value: str) -> str:
        # Same character set as curl_easy_escape: only unreserved characters are kept.
        try:
            return requests.utils.quote(value, safe="")
        except (TypeError, ValueError) as exc:
            raise UrlEncodingError("failed to encode the query URL") from exc

    def execute(self, url: str, tls: TLSConfig | None = None) -> TransportResponse:
        request_kwargs = self._build_tls_kwargs(tls)

        with requests.Session() as session:
            try:
                response = session.get(url, **request_kwargs)
            except requests.RequestException as exc:
                self.logger.error("Transport failure for url=%s: %s", url, exc)
                raise ProcessingError(str(exc)) from exc

            body = response.content.decode("utf-8", errors="surrogateescape")
            return TransportResponse(body=body, status_code=response.status_code)

    def _build_tls_kwargs(self, tls: TLSConfig | None) -> dict:
        if tls is None:
            return {}
        return {
            "verify": tls.ca_cert_path,
            "cert": (tls.client_cert_path, tls.client_key_path),
        }


__all__ = ["Transport", "TransportResponse", "RequestsTransport"]
