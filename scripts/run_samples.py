#!/usr/bin/env python3
"""
Sample menu entrypoint - pick the hosted or local RAG sample and run it.
"""

import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    """Launch the sample menu and return its exit status."""
    try:
        from ragdemo.tui.main import main as menu_main
        return menu_main()
    except KeyboardInterrupt:
        print("\nℹ️  Samples interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
