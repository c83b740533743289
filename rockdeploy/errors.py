"""Exceptions raised by the deployment steps.

Every step raises a subclass of DeployError. Nothing below the top-level
handler in rockdeploy.pipeline terminates the process.
"""


class DeployError(Exception):
    """Base class for all fatal deployment errors.

    The pipeline sets stage (the stage that failed) and result (what the
    run completed before failing) as the error passes through it.
    """

    stage = None
    result = None


class ConfigurationError(DeployError):
    """server.json is missing, unparsable or lacks a required field."""


class BuildError(DeployError):
    """An external build command exited non-zero or could not be started."""

    def __init__(self, command: str, returncode: int | None, detail: str | None = None):
        self.command = command
        self.returncode = returncode
        if detail:
            message = f"Failed to execute: {command} ({detail})"
        else:
            message = f"Failed to execute: {command} (exit code {returncode})"
        super().__init__(message)


class ArtifactMissingError(DeployError):
    """The build finished but its output archive is not where it should be."""

    def __init__(self, description: str, path):
        self.path = path
        super().__init__(f"{description} not found: {path}")


class CopyError(DeployError):
    """Copying an archive into the staging tree failed."""


class UploadError(DeployError):
    """FTP connection, login or transfer failed."""


class RemoteTriggerError(DeployError):
    """The deployer.php call failed, timed out or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
