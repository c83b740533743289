"""Upload of staged archives to the webhosting FTP server."""

import ftplib
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path, PurePosixPath

from rockdeploy.config import ServerConfig
from rockdeploy.errors import UploadError

logger = logging.getLogger(__name__)


class Uploader(ABC):
    """Abstract base class for artifact uploaders."""

    def __init__(self, config: ServerConfig) -> None:
        """Initialize the uploader.

        Args:
            config: Loaded server configuration.
        """
        self.config = config

    @abstractmethod
    def upload(self, local_path: Path, remote_dir: str, description: str) -> None:
        """Upload one file into a remote directory.

        Args:
            local_path: Staged archive
            remote_dir: Remote destination directory
            description: Name for messages, e.g. "Frontend build"

        Raises:
            UploadError: If the transfer fails
        """


class FtpUploader(Uploader):
    """Passive-mode FTP uploader.

    Only the given file is stored; nothing at the destination is deleted.
    """

    def __init__(
        self,
        config: ServerConfig,
        ftp_factory: Callable[[], ftplib.FTP] = ftplib.FTP,
    ) -> None:
        super().__init__(config)
        self._ftp_factory = ftp_factory

    def upload(self, local_path: Path, remote_dir: str, description: str) -> None:
        logger.info(f"Uploading {description} to {self.config.host}:{remote_dir}")

        ftp = self._ftp_factory()
        try:
            ftp.connect(self.config.host, self.config.port)
            ftp.login(self.config.username, self.config.password.get_secret_value())
            ftp.set_pasv(True)
            self._change_dir(ftp, remote_dir)
            with open(local_path, "rb") as f:
                ftp.storbinary(f"STOR {local_path.name}", f)
        except ftplib.all_errors as exc:
            raise UploadError(f"Failed to upload {description}: {exc}") from exc
        finally:
            self._disconnect(ftp)

        logger.info(f"{description} uploaded successfully to {remote_dir}")

    @staticmethod
    def _change_dir(ftp: ftplib.FTP, remote_dir: str) -> None:
        """Change into remote_dir, creating missing components."""
        path = PurePosixPath(remote_dir)
        if path.is_absolute():
            ftp.cwd("/")

        for part in path.parts:
            if part == "/":
                continue
            try:
                ftp.cwd(part)
            except ftplib.error_perm:
                logger.debug(f"Creating remote directory: {part}")
                ftp.mkd(part)
                ftp.cwd(part)

    @staticmethod
    def _disconnect(ftp: ftplib.FTP) -> None:
        try:
            ftp.quit()
        except ftplib.all_errors + (AttributeError,):
            ftp.close()
