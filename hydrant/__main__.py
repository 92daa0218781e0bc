"""
Package entry point.

Allows running the application via:

    python -m hydrant

This simply forwards execution to hydrant.cli.main().
"""

from hydrant.cli import main

if __name__ == "__main__":
    main()
