# main.py

import sys

from fractagons.cli import main

if __name__ == "__main__":
    sys.exit(main())
