"""
Run the manifest generator as a module:

    python -m coursecatalog generate --root Notes --out courses.json

The exit code is the one returned by the selected sub-command.
"""

import sys

from coursecatalog.cli import main


if __name__ == "__main__":
    main(sys.argv[1:])
