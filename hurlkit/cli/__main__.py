"""
Entry point for running the hurlkit CLI as a module.

Usage: python -m hurlkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
