"""
Package entry point.

Allows running the application via:

    python -m courseadder

This simply forwards execution to courseadder.cli.main().
"""

from courseadder.cli import main

if __name__ == "__main__":
    main()
