"""
Module execution entry point.

Allows running with: python -m auditpath_cli
"""

import sys
from auditpath_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
