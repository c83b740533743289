"""Console entry points.

Each command runs one fixed deployment profile from the deployer
directory (the current directory, or ROCKDEPLOY_ROOT):

    rockdeploy-build      Build rockdash and rockapi into dist/
    rockdeploy-frontend   Build, upload and activate the frontend
    rockdeploy-backend    Build, upload and activate the backend
    rockdeploy-full       Build both, upload backend then frontend, activate

The same profiles are available as ``python -m rockdeploy PROFILE``.
"""

import argparse
import sys

from rockdeploy import __version__
from rockdeploy.console import configure_logging
from rockdeploy.pipeline import run
from rockdeploy.profiles import PROFILES, get_profile


def _parser(prog: str | None, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Configuration:
    server.json in the deployer directory (see server-example.json).
    ROCKDEPLOY_ROOT - Deployer directory (default: current directory)
    ROCKDEPLOY_LOG_LEVEL - Log level (default: INFO)
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_profile(name: str, argv: list[str] | None = None) -> int:
    """Parse (empty) arguments and run a profile.

    Returns:
        Process exit status.
    """
    profile = get_profile(name)
    _parser(f"rockdeploy-{name}", f"{profile.title} of rockdash/rockapi").parse_args(argv)
    configure_logging()
    return run(profile)


def build() -> None:
    """Build rockdash and rockapi and stage their archives."""
    sys.exit(run_profile("build"))


def frontend() -> None:
    """Deploy the frontend."""
    sys.exit(run_profile("frontend"))


def backend() -> None:
    """Deploy the backend."""
    sys.exit(run_profile("backend"))


def full() -> None:
    """Deploy backend and frontend."""
    sys.exit(run_profile("full"))


def main(argv: list[str] | None = None) -> int:
    """``python -m rockdeploy PROFILE`` entry point."""
    parser = _parser("rockdeploy", "Build and deploy rockdash/rockapi")
    parser.add_argument("profile", choices=sorted(PROFILES), help="Deployment profile to run")
    args = parser.parse_args(argv)

    configure_logging()
    return run(get_profile(args.profile))
