"""
Self-Check Module Entry Point
==============================

Allows running the CLI via: python -m selfcheck
"""

from selfcheck.cli import main

if __name__ == "__main__":
    main()
