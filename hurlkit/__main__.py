"""
Entry point for running the hurlkit CLI as a module.

Usage: python -m hurlkit [command] [options]
"""

from hurlkit.cli.parser import main

if __name__ == "__main__":
    main()
