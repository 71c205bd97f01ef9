"""Command implementations for the hurlkit CLI."""
