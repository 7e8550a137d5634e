#!/usr/bin/env python3
"""
run.py - Main entry point for c4engine

Usage:
    python run.py play [--side first|second] [--delay SECONDS]
    python run.py analyze --moves 3,4,3
    python run.py benchmark [--iterations N]
"""

import sys

from c4engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
