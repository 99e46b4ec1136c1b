"""Module entrypoint for `python -m coursetrack`."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
