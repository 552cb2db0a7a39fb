#!/usr/bin/env python3
"""Module: formgrid.__main__

Allows the package to be executed as a module:
    python -m formgrid columns form.json
"""

import sys

from formgrid.cli import main

if __name__ == "__main__":
    sys.exit(main())
