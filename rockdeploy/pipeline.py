"""Deployment sequencing.

A run moves through its profile's stages strictly in order:

    LOADING_CONFIG -> BUILDING_FRONTEND -> BUILDING_BACKEND -> SUMMARIZING
        -> UPLOADING_FTP -> TRIGGERING_REMOTE -> DONE

Stages that do not apply to a profile are skipped. The first DeployError
ends the run; run() is the only place that turns it into an exit status.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path

from rockdeploy import console
from rockdeploy.artifacts import BuildArtifact, stage_artifact
from rockdeploy.builder import PROJECTS, Runner, build_project
from rockdeploy.config import ServerConfig, get_workspace_root, load_server_config
from rockdeploy.console import StepTimer, format_size
from rockdeploy.errors import DeployError
from rockdeploy.profiles import DeploymentProfile
from rockdeploy.runner import run_command
from rockdeploy.trigger import build_trigger_url, deployment_key, trigger_remote_deployment
from rockdeploy.uploader import FtpUploader, Uploader

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    LOADING_CONFIG = "loading_config"
    BUILDING_FRONTEND = "building_frontend"
    BUILDING_BACKEND = "building_backend"
    SUMMARIZING = "summarizing"
    UPLOADING_FTP = "uploading_ftp"
    TRIGGERING_REMOTE = "triggering_remote"
    DONE = "done"
    FAILED = "failed"


BUILD_STAGES = {
    "frontend": Stage.BUILDING_FRONTEND,
    "backend": Stage.BUILDING_BACKEND,
}

BUILT_PROJECT = {stage: name for name, stage in BUILD_STAGES.items()}


@dataclass
class DeploymentResult:
    """What a run did, filled in as stages complete."""

    profile: str
    stages: list[Stage] = field(default_factory=list)
    artifacts: dict[str, BuildArtifact] = field(default_factory=dict)
    uploads: list[tuple[str, str]] = field(default_factory=list)
    key: str | None = None
    trigger_url: str | None = None
    response: str | None = None
    durations: dict[int, float] = field(default_factory=dict)


def stages_for(profile: DeploymentProfile) -> list[Stage]:
    """List the stages a profile goes through, in order."""
    stages = []
    if profile.needs_config:
        stages.append(Stage.LOADING_CONFIG)
    for name in ("frontend", "backend"):
        if profile.builds_project(name):
            stages.append(BUILD_STAGES[name])
    stages.append(Stage.SUMMARIZING)
    if profile.uploads:
        stages.append(Stage.UPLOADING_FTP)
    if profile.trigger:
        stages.append(Stage.TRIGGERING_REMOTE)
    stages.append(Stage.DONE)
    return stages


def run_pipeline(
    profile: DeploymentProfile,
    root: Path | None = None,
    runner: Runner = run_command,
    uploader_factory: Callable[[ServerConfig], Uploader] = FtpUploader,
    today: date | None = None,
    timer: StepTimer | None = None,
) -> DeploymentResult:
    """Run every stage of a profile.

    Args:
        profile: Deployment profile to run
        root: Deployer directory (defaults to get_workspace_root())
        runner: Command runner for the build commands
        uploader_factory: Builds the uploader from the loaded config
        today: Date for the deployment key (defaults to today)
        timer: Step timer (a fresh one per run by default)

    Returns:
        DeploymentResult of the completed run.

    Raises:
        DeployError: From the first stage that fails
    """
    root = root or get_workspace_root()
    timer = timer or StepTimer()
    result = DeploymentResult(profile=profile.name)
    config: ServerConfig | None = None
    step = 0
    stage = Stage.LOADING_CONFIG

    try:
        for stage in stages_for(profile):
            if stage is Stage.LOADING_CONFIG:
                config = load_server_config(profile.required_fields, root)
                console.success("Server configuration loaded from server.json")

            elif stage in BUILT_PROJECT:
                project = PROJECTS[BUILT_PROJECT[stage]]
                step += 1
                timer.start(step, f"Building {project.title} ({project.label})")
                build_project(project, root, runner)
                result.artifacts[project.name] = stage_artifact(project, root)
                timer.complete(step, f"{project.title} build completed")

            elif stage is Stage.SUMMARIZING:
                step += 1
                timer.start(step, f"{profile.title} Summary")
                _print_summary(result)
                timer.complete(step, f"{profile.title} summary completed")

            elif stage is Stage.UPLOADING_FTP:
                step += 1
                timer.start(step, "Uploading to FTP Server")
                _upload_all(profile, config, uploader_factory(config), result)
                timer.complete(step, "FTP upload completed")

            elif stage is Stage.TRIGGERING_REMOTE:
                step += 1
                timer.start(step, "Triggering Remote Deployment")
                result.key = deployment_key(today)
                result.trigger_url = build_trigger_url(
                    config.app_url, result.key, frontend=profile.frontend_only
                )
                result.response = trigger_remote_deployment(result.trigger_url)
                console.success("Remote deployment triggered successfully!")
                print(f"  Response: {result.response}")
                timer.complete(step, "Remote deployment triggered")

            elif stage is Stage.DONE:
                step += 1
                timer.start(step, f"{profile.title} Complete")
                _print_final(profile, config, result)
                timer.complete(step, f"{profile.title} process completed")

            result.stages.append(stage)
    except DeployError as exc:
        result.stages.append(Stage.FAILED)
        result.durations = dict(timer.durations)
        exc.stage = stage
        exc.result = result
        raise

    result.durations = dict(timer.durations)
    return result


def run(profile: DeploymentProfile, **kwargs) -> int:
    """Run a profile and report the outcome.

    Returns:
        Exit status: 0 on success, 1 on any deployment error.
    """
    print(f"Starting {profile.title.lower()} process...")
    try:
        run_pipeline(profile, **kwargs)
    except DeployError as exc:
        logger.debug(f"{profile.name} failed", exc_info=True)
        console.error(f"{profile.title} failed: {exc}")
        return 1
    return 0


def _print_summary(result: DeploymentResult) -> None:
    for artifact in result.artifacts.values():
        console.success(f"{artifact.name.capitalize()} built successfully!")
        print(f"  Location: {artifact.dest_path}")

    print("\nBuild Sizes:")
    for artifact in result.artifacts.values():
        print(f"  {artifact.name.capitalize()}: {format_size(artifact.size_bytes or 0)}")


def _print_final(
    profile: DeploymentProfile,
    config: ServerConfig | None,
    result: DeploymentResult,
) -> None:
    if config is None:
        console.success(f"{profile.title} completed successfully!")
        print("Ready to upload to server!")
        return

    console.success("Files uploaded and deployment triggered successfully!")
    for name, remote_dir in result.uploads:
        print(f"  {name.capitalize()}: {config.host} -> {remote_dir}")
    if result.trigger_url:
        print(f"  Remote deployment: {result.trigger_url}")


def _upload_all(
    profile: DeploymentProfile,
    config: ServerConfig,
    uploader: Uploader,
    result: DeploymentResult,
) -> None:
    """Upload staged archives one at a time, in profile order."""
    for name in profile.uploads:
        artifact = result.artifacts[name]
        remote_dir = config.remote_path(name)
        description = f"{name.capitalize()} build"
        uploader.upload(artifact.dest_path, remote_dir, description)
        console.success(f"{description} uploaded successfully to {remote_dir}")
        result.uploads.append((name, remote_dir))
