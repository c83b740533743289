"""External build commands for the rockdash and rockapi projects."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from rockdeploy.errors import BuildError
from rockdeploy.runner import CommandResult, run_command

logger = logging.getLogger(__name__)

Runner = Callable[[str, Path | None], CommandResult]


@dataclass(frozen=True)
class ProjectSpec:
    """A project built by an external command into a zip archive."""

    name: str
    label: str
    directory: str
    command: str
    archive: str

    @property
    def title(self) -> str:
        """Human name, e.g. "Frontend"."""
        return self.name.capitalize()

    def project_dir(self, root: Path) -> Path:
        """Project directory relative to the deployer directory."""
        return (root / self.directory).resolve()

    def archive_path(self, root: Path) -> Path:
        """Where the build tool leaves its archive."""
        return self.project_dir(root) / self.archive


FRONTEND = ProjectSpec(
    name="frontend",
    label="rockdash",
    directory="../rockdash",
    command="npm run build:prod",
    archive=".output/build.zip",
)

BACKEND = ProjectSpec(
    name="backend",
    label="rockapi",
    directory="../rockapi",
    command="npm run build",
    archive="dist/build.zip",
)

PROJECTS = {project.name: project for project in (FRONTEND, BACKEND)}


def build_project(project: ProjectSpec, root: Path, runner: Runner = run_command) -> None:
    """Run a project's build command in its directory.

    Args:
        project: Project to build
        root: Deployer directory
        runner: Command runner (run_command unless testing)

    Raises:
        BuildError: If the command could not be started or exited non-zero
    """
    result = runner(project.command, project.project_dir(root))

    if result.returncode is None:
        raise BuildError(project.command, None, detail=result.error)
    if not result.ok:
        raise BuildError(project.command, result.returncode)

    logger.info(f"Command completed: {project.command}")
