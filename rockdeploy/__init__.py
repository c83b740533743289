"""rockdeploy - build, package and ship rockdash/rockapi to webhosting.

Submodules:
    config: server.json loading and validation
    builder: External build commands
    artifacts: Build archive checks and staging
    uploader: FTP upload of staged archives
    trigger: Remote deployer.php call
    pipeline: Step sequencing and error reporting
    cli: Console entry points
"""

__version__ = "0.3.0"
