"""Pytest configuration and fixtures for rockdeploy tests.

Each test gets its own directory tree laid out like a real checkout:

    tmp_path/
        deployer/     <- deployer directory (server.json, dist/)
        rockdash/     <- frontend project
        rockapi/      <- backend project
"""

import json
import os
from pathlib import Path
from typing import Any

import pytest

from rockdeploy.builder import PROJECTS
from rockdeploy.errors import UploadError
from rockdeploy.runner import CommandResult


VALID_CONFIG: dict[str, Any] = {
    "host": "ftp.example.com",
    "username": "deploy",
    "password": "s3cr3t-ftp-pass",
    "port": 21,
    "remotePathFrontend": "/public_html/app",
    "remotePathBackend": "/public_html/api",
    "appUrl": "https://app.example.com",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep ROCKDEPLOY_* variables from the outer shell out of tests."""
    for key in list(os.environ):
        if key.startswith("ROCKDEPLOY_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Create the deployer directory and its sibling projects."""
    root = tmp_path / "deployer"
    root.mkdir()
    (tmp_path / "rockdash").mkdir()
    (tmp_path / "rockapi").mkdir()
    return root


@pytest.fixture
def write_config(workspace):
    """Write server.json into the deployer directory."""

    def _write(data: dict[str, Any] | None = None, **overrides: Any) -> Path:
        config = dict(VALID_CONFIG if data is None else data)
        config.update(overrides)
        path = workspace / "server.json"
        path.write_text(json.dumps(config))
        return path

    return _write


class FakeRunner:
    """Command runner that records calls and fakes build output."""

    def __init__(
        self,
        returncodes: dict[str, int] | None = None,
        write_archives: bool = True,
        archive_bytes: bytes = b"PK\x05\x06" + b"\x00" * 18,
    ):
        self.returncodes = returncodes or {}
        self.write_archives = write_archives
        self.archive_bytes = archive_bytes
        self.calls: list[tuple[str, Path | None]] = []

    def __call__(self, command: str, cwd: Path | None = None) -> CommandResult:
        self.calls.append((command, cwd))
        returncode = self.returncodes.get(command, 0)
        if returncode == 0 and self.write_archives and cwd is not None:
            for project in PROJECTS.values():
                if project.command == command:
                    archive = cwd / project.archive
                    archive.parent.mkdir(parents=True, exist_ok=True)
                    archive.write_bytes(self.archive_bytes)
        return CommandResult(command=command, cwd=cwd, returncode=returncode)

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]


@pytest.fixture
def fake_runner():
    """A runner whose builds all succeed and leave a dummy archive."""
    return FakeRunner()


class RecordingUploader:
    """Uploader that records transfers instead of talking FTP."""

    def __init__(self, config, events: list | None = None, fail_on: str | None = None):
        self.config = config
        self.events = events if events is not None else []
        self.fail_on = fail_on

    def upload(self, local_path: Path, remote_dir: str, description: str) -> None:
        self.events.append(("upload", description, local_path, remote_dir))
        if self.fail_on and self.fail_on in description.lower():
            raise UploadError(f"Failed to upload {description}: 530 Login incorrect.")
