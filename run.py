"""
Development launcher: runs the app straight from a source checkout.

Puts ./src on sys.path so 'hamiltonianfield' imports without `pip install -e .`,
then hands the command line to hamiltonianfield.main.

Usage:
    $ python run.py --resolution 128
    $ python run.py --headless --source clip.mp4 --frames 100
"""
import os
import sys

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
sys.path.insert(0, SRC_DIR)

from hamiltonianfield.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
