#!/usr/bin/env python3
# /tedit/main.py
"""
tedit launcher for source checkouts.

Puts ``src/`` on the import path and hands over to `tedit.main.start`.
Installed copies use the ``tedit`` console script instead.
"""

import os
import sys

# Ensure the 'tedit' package is importable when run from a checkout.
project_src = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_src not in sys.path:
    sys.path.insert(0, project_src)

from tedit.main import start  # noqa: E402


if __name__ == "__main__":
    start()
