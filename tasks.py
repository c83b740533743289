"""Invoke tasks for rockdeploy."""

from pathlib import Path

from invoke import task
from invoke.context import Context

# Staging tree written by the deployment profiles
DIST_DIR = Path("dist")


@task
def build(ctx: Context) -> None:
    """Build rockdash and rockapi and stage their archives in dist/."""
    ctx.run("uv run rockdeploy-build", pty=True)


@task
def deploy(ctx: Context) -> None:
    """Build both projects, upload backend then frontend, trigger the deployer."""
    ctx.run("uv run rockdeploy-full", pty=True)


@task(name="deploy-frontend")
def deploy_frontend(ctx: Context) -> None:
    """Build, upload and activate the frontend only."""
    ctx.run("uv run rockdeploy-frontend", pty=True)


@task(name="deploy-backend")
def deploy_backend(ctx: Context) -> None:
    """Build, upload and activate the backend only."""
    ctx.run("uv run rockdeploy-backend", pty=True)


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "uv run pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=rockdeploy --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context, all: bool = False) -> None:
    """Clean up temporary files.

    Args:
        ctx: Invoke context
        all: Also remove the staged archives in dist/
    """
    import shutil

    # Clean Python cache
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    # Clean build artifacts
    for path in ["build", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    if all and DIST_DIR.exists():
        print(f"Removing staged archives in {DIST_DIR}/...")
        shutil.rmtree(DIST_DIR)

    print("Cleanup complete")
