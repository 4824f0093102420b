#!/usr/bin/env python3
"""
Archive job entry point.
Downloads S3 objects, zips them, uploads the archive and sends notifications.
"""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from presentation.cli import main

if __name__ == '__main__':
    sys.exit(main())
