"""Application entry point for pathsweep.

Parses the command line, initializes logging and runs the requested command.
"""

import sys

from pathsweep.cli import main

if __name__ == "__main__":
    sys.exit(main())
