"""
Run the sample menu: python -m ragdemo
"""

import sys

from .tui.main import main

if __name__ == "__main__":
    sys.exit(main())
