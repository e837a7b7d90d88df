"""
kappagotchi module entrypoint

Allows launching kappagotchi directly via:
    python -m kappagotchi status
"""

import sys

from kappagotchi.cli import main

if __name__ == "__main__":
    sys.exit(main())
