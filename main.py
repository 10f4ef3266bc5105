#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py photos/
    python main.py photos/ --cols 6 --cellsize 200 --output wall.jpg

Or use the installed script:

    photo-collage --help
"""

from photo_collage.cli import app

if __name__ == "__main__":
    app()
