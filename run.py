#!/usr/bin/env python3
"""
Entry point for nomenclator.

Usage:
    python run.py                          # 100 keys into nomenclator.db
    python run.py --keycount 20 --jsonout  # also write nomenclator.json
    python run.py --name-source URL        # names from a remote service

See nomenclator/cli.py for the full flag and environment variable list.
"""
import sys

from nomenclator.cli import main


if __name__ == '__main__':
    sys.exit(main())
