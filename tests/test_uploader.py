"""Tests for the FTP uploader."""

import ftplib
from unittest.mock import MagicMock, call

import pytest

from rockdeploy.config import ServerConfig
from rockdeploy.errors import UploadError
from rockdeploy.uploader import FtpUploader, Uploader

from conftest import VALID_CONFIG


@pytest.fixture
def config():
    return ServerConfig.model_validate(VALID_CONFIG)


@pytest.fixture
def archive(tmp_path):
    path = tmp_path / "dist" / "frontend" / "build.zip"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"archive-bytes")
    return path


@pytest.fixture
def ftp():
    """Mock FTP connection."""
    return MagicMock(spec=ftplib.FTP)


class TestFtpUploader:
    """Tests for FtpUploader."""

    def test_is_uploader(self, config):
        assert isinstance(FtpUploader(config), Uploader)

    def test_upload(self, config, archive, ftp):
        """Test connect, login, passive mode and STOR of the single file."""
        uploader = FtpUploader(config, ftp_factory=lambda: ftp)
        uploader.upload(archive, "public_html/app", "Frontend build")

        ftp.connect.assert_called_once_with("ftp.example.com", 21)
        ftp.login.assert_called_once_with("deploy", "s3cr3t-ftp-pass")
        ftp.set_pasv.assert_called_once_with(True)
        ftp.cwd.assert_has_calls([call("public_html"), call("app")])
        assert ftp.storbinary.call_count == 1
        command, handle = ftp.storbinary.call_args.args
        assert command == "STOR build.zip"
        assert str(handle.name) == str(archive)
        ftp.quit.assert_called_once()

    def test_absolute_remote_dir(self, config, archive, ftp):
        """Test an absolute remote path starts from the server root."""
        FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/public_html/app", "Frontend build")
        assert ftp.cwd.call_args_list[0] == call("/")

    def test_creates_missing_remote_dir(self, config, archive, ftp):
        """Test a missing remote directory is created."""
        attempts = []

        def cwd(part):
            attempts.append(part)
            if part == "app" and attempts.count("app") == 1:
                raise ftplib.error_perm("550 No such directory")

        ftp.cwd.side_effect = cwd
        FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "public_html/app", "Frontend build")

        ftp.mkd.assert_called_once_with("app")
        assert attempts == ["public_html", "app", "app"]

    def test_never_deletes(self, config, archive, ftp):
        """Test nothing at the destination is removed."""
        FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/public_html/app", "Frontend build")
        ftp.delete.assert_not_called()
        ftp.rmd.assert_not_called()

    def test_login_failure(self, config, archive, ftp):
        """Test an auth error becomes UploadError with the server text."""
        ftp.login.side_effect = ftplib.error_perm("530 Login incorrect.")

        with pytest.raises(UploadError) as exc_info:
            FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/app", "Frontend build")

        assert "Failed to upload Frontend build" in str(exc_info.value)
        assert "530 Login incorrect." in str(exc_info.value)
        ftp.storbinary.assert_not_called()

    def test_connection_failure(self, config, archive, ftp):
        """Test a refused connection becomes UploadError."""
        ftp.connect.side_effect = ConnectionRefusedError("Connection refused")
        with pytest.raises(UploadError, match="Connection refused"):
            FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/app", "Backend build")

    def test_transfer_failure(self, config, archive, ftp):
        """Test an error during STOR becomes UploadError."""
        ftp.storbinary.side_effect = ftplib.error_temp("451 Local error")
        with pytest.raises(UploadError, match="451"):
            FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/app", "Frontend build")

    def test_missing_local_file(self, config, tmp_path, ftp):
        """Test an unreadable local file becomes UploadError."""
        with pytest.raises(UploadError):
            FtpUploader(config, ftp_factory=lambda: ftp).upload(
                tmp_path / "missing.zip", "/app", "Frontend build"
            )

    def test_connection_closed_after_failure(self, config, archive, ftp):
        """Test close() is used when quit() itself fails."""
        ftp.login.side_effect = ftplib.error_perm("530 Login incorrect.")
        ftp.quit.side_effect = EOFError()

        with pytest.raises(UploadError):
            FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/app", "Frontend build")
        ftp.close.assert_called_once()

    def test_no_retry(self, config, archive, ftp):
        """Test a failed transfer is attempted once."""
        ftp.storbinary.side_effect = ftplib.error_temp("421 Timeout")
        with pytest.raises(UploadError):
            FtpUploader(config, ftp_factory=lambda: ftp).upload(archive, "/app", "Frontend build")
        assert ftp.connect.call_count == 1
        assert ftp.storbinary.call_count == 1
