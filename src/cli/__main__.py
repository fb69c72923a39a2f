"""Entry point for running CLI as module.

Usage:
    python -m src.cli fix-urls --dry-run
    python -m src.cli classify https://www.visitbergen.com/event/x
"""

from src.cli.main import main

if __name__ == "__main__":
    main()
