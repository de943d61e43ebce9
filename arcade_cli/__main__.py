"""Allow ``python -m arcade_cli``."""

import sys

from arcade_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
