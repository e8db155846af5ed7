# main.py
import sys

from sharedstreets.cli import main

if __name__ == "__main__":
    sys.exit(main())
