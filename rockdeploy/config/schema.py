"""Pydantic model for server.json.

The file uses camelCase keys; attributes are snake_case with the JSON key
as alias.
"""

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ServerConfig(BaseModel):
    """FTP credentials, remote paths and the remote application URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    host: str
    username: str
    password: SecretStr
    port: int = 21
    remote_path_frontend: str | None = Field(default=None, alias="remotePathFrontend")
    remote_path_backend: str | None = Field(default=None, alias="remotePathBackend")
    app_url: str | None = Field(default=None, alias="appUrl")

    def remote_path(self, name: str) -> str | None:
        """Get the remote upload directory for an artifact name."""
        if name == "frontend":
            return self.remote_path_frontend
        if name == "backend":
            return self.remote_path_backend
        raise ValueError(f"Unknown artifact name: {name}")
