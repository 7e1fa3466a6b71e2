#!/usr/bin/env python3
"""
Точка входа: python main.py test.output [--roles A0 A1 A2] [--json extents.json]
"""
import sys

from srl_extent.cli import main

if __name__ == "__main__":
    sys.exit(main())
