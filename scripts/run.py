"""Connect a Paintbot player from the command line."""

from __future__ import annotations

import sys

from paintbot.ops.cli import main

if __name__ == "__main__":
    sys.exit(main())
