"""
Main entry point for weatherbar.
"""

import sys
from weatherbar.cli import main

if __name__ == "__main__":
    sys.exit(main())
