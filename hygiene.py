#!/usr/bin/env python3
"""
Entry point for the dormitory hygiene report

Usage:
    python hygiene.py report <PATH_TO_CSV> [-o OUT.xlsx] [-r REPORTER] [-d DATE] [-t TIME]
    python hygiene.py init <NAME>
"""
import sys
from pathlib import Path

# Make hygiene_core importable when running from the top-level directory
sys.path.append(str(Path(__file__).resolve().parent))

from hygiene_core.runner import main

if __name__ == "__main__":
    sys.exit(main())
