#!/usr/bin/env python
"""
Development convenience script to run pkg-uninstaller from a checkout.
"""
import sys
import os

# Add src directory to path
src_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src')
sys.path.insert(0, src_path)

from pkg_uninstaller.cli import main

if __name__ == "__main__":
    sys.exit(main())
