#!/usr/bin/env python3
"""
rau CLI.

Script entry point equivalent to the installed `rau` command.

Usage:
    python cli.py --help
    python cli.py clients rec123
    python cli.py clients rec123 Status=Active Score=5
    python cli.py clients --recent --verbose
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from rau.cli.main import app

if __name__ == "__main__":
    app()
