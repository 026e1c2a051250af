#!/usr/bin/env python3
"""
Run the resourcefinder CLI from a source checkout.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / 'src'))

from resourcefinder.cli import cli

if __name__ == '__main__':
    cli()
