"""
hurlkit - installer for the hurl HTTP testing tool.

Resolves a hurl release, downloads (or restores from cache) the matching
pre-built distribution, and puts the ``hurl`` executable on the search path.
"""
