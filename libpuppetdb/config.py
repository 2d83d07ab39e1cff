from pydantic import BaseModel, ConfigDict, Field

from .constants import API_VERSION_DEFAULT, PUPPETDB_HTTP_PORT, ApiVersion


class TLSConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    ca_cert_path: str = Field(min_length=1)
    client_cert_path: str = Field(min_length=1)
    client_key_path: str = Field(min_length=1)


class ConnectorConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    hostname: str = Field(min_length=1)
    port: int = Field(default=PUPPETDB_HTTP_PORT, ge=1, le=65535)
    api_version: ApiVersion = API_VERSION_DEFAULT
    ca_cert_path: str | None = None
    client_cert_path: str | None = None
    client_key_path: str | None = None

    def certificate_paths(self) -> list[str]:
        """Certificate paths in validation order: CA, client cert, client key."""
        return [
            self.ca_cert_path or "",
            self.client_cert_path or "",
            self.client_key_path or "",
        ]
