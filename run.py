# -*- coding: utf-8 -*-

"""
Main entry point for launching the URN Catalog Toolkit command.
"""

import sys

from urn_catalog_toolkit.app import main

if __name__ == '__main__':
    sys.exit(main())
