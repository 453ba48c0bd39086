"""
Usage:
    python -m bytedump [-bcoxCd] [-s SIZE] [-n SIZE] file
    python -m bytedump --help
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
