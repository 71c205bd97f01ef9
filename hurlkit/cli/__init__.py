"""
hurlkit CLI module.

This module provides the command-line interface for hurlkit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
