"""Entry point for running the roster watcher as a module.

Usage:
    python -m roster_converter
    python -m roster_converter --input-directory ./input --log-level debug
"""

from .cli import main

if __name__ == "__main__":
    main()
