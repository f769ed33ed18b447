"""
Package entry point.

Allows running the application via:

    python -m myroster

This simply forwards execution to myroster.cli.main().
"""

from myroster.cli import main

if __name__ == "__main__":
    main()
