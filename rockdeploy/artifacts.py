"""Build archive checks and staging into dist/<name>/."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from rockdeploy.builder import ProjectSpec
from rockdeploy.errors import ArtifactMissingError, CopyError

logger = logging.getLogger(__name__)

STAGING_DIR = "dist"


@dataclass
class BuildArtifact:
    """A build archive and its staged copy."""

    name: str
    source_path: Path
    dest_path: Path
    size_bytes: int | None = None


def staging_path(root: Path, name: str, filename: str = "build.zip") -> Path:
    """Get the staged location of an archive, e.g. dist/frontend/build.zip."""
    return root / STAGING_DIR / name / filename


def check_file_exists(path: Path, description: str) -> None:
    """Make sure a build produced its archive.

    Raises:
        ArtifactMissingError: If the path is not a file
    """
    if not path.is_file():
        raise ArtifactMissingError(description, path)
    logger.info(f"{description} found: {path}")


def copy_file(src: Path, dest: Path) -> int:
    """Copy a file, creating the destination directory as needed.

    Returns:
        Size of the copied file in bytes.

    Raises:
        CopyError: If the copy fails
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
        size = dest.stat().st_size
    except OSError as exc:
        raise CopyError(f"Failed to copy {src} to {dest}: {exc}") from exc

    logger.info(f"Copied: {src} -> {dest}")
    return size


def stage_artifact(project: ProjectSpec, root: Path) -> BuildArtifact:
    """Check a project's build archive and copy it into the staging tree.

    Args:
        project: Project that was just built
        root: Deployer directory

    Returns:
        BuildArtifact with size_bytes set.
    """
    source = project.archive_path(root)
    check_file_exists(source, f"{project.title} build zip")

    artifact = BuildArtifact(
        name=project.name,
        source_path=source,
        dest_path=staging_path(root, project.name, source.name),
    )
    artifact.size_bytes = copy_file(artifact.source_path, artifact.dest_path)
    return artifact
