#!/usr/bin/env python3
"""
Entry point for running pc_build_validator as a module.
"""

import sys

from pc_build_validator.cli import main

if __name__ == '__main__':
    sys.exit(main())
