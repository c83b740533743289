"""Allow ``python -m rockdeploy PROFILE``."""

import sys

from rockdeploy.cli import main

if __name__ == "__main__":
    sys.exit(main())
