"""Deployment profiles.

Each profile is one fixed pipeline: which projects to build, the order in
which staged archives are uploaded, and whether deployer.php is called.
"""

from dataclasses import dataclass

from rockdeploy.builder import BACKEND, FRONTEND, ProjectSpec

# Credentials every uploading profile needs
FTP_FIELDS = ("host", "username", "password", "port")

REMOTE_PATH_FIELDS = {
    "frontend": "remotePathFrontend",
    "backend": "remotePathBackend",
}


@dataclass(frozen=True)
class DeploymentProfile:
    """A named deployment variant."""

    name: str
    title: str
    builds: tuple[ProjectSpec, ...]
    uploads: tuple[str, ...] = ()
    trigger: bool = False
    frontend_only: bool = False

    @property
    def needs_config(self) -> bool:
        return bool(self.uploads) or self.trigger

    @property
    def required_fields(self) -> tuple[str, ...]:
        """server.json keys that must be present and non-empty."""
        if not self.needs_config:
            return ()

        fields = list(FTP_FIELDS)
        for name in ("frontend", "backend"):
            if name in self.uploads:
                fields.append(REMOTE_PATH_FIELDS[name])
        if self.trigger:
            fields.append("appUrl")
        return tuple(fields)

    def builds_project(self, name: str) -> bool:
        return any(project.name == name for project in self.builds)


PROFILES: dict[str, DeploymentProfile] = {
    profile.name: profile
    for profile in (
        DeploymentProfile(
            name="build",
            title="Build",
            builds=(FRONTEND, BACKEND),
        ),
        DeploymentProfile(
            name="frontend",
            title="Frontend deployment",
            builds=(FRONTEND,),
            uploads=("frontend",),
            trigger=True,
            frontend_only=True,
        ),
        DeploymentProfile(
            name="backend",
            title="Backend deployment",
            builds=(BACKEND,),
            uploads=("backend",),
            trigger=True,
        ),
        DeploymentProfile(
            name="full",
            title="Deployment",
            builds=(FRONTEND, BACKEND),
            uploads=("backend", "frontend"),
            trigger=True,
        ),
    )
}


def get_profile(name: str) -> DeploymentProfile:
    """Look up a profile by name.

    Raises:
        KeyError: If there is no such profile
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown deployment profile: {name}") from None
