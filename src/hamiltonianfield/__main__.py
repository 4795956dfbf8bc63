"""Command-line interface."""
import sys

from hamiltonianfield.main import main

if __name__ == "__main__":
    sys.exit(main())
