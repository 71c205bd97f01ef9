"""
Installation of hurl distributions.

Acquires (from cache or download), unpacks and verifies hurl.
"""

from .extractor import Extractor, find_binary_root
from .pipeline import AcquisitionPipeline
from .verifier import InstallationVerifier
from .installer import InstallResult, Installer

__all__ = [
    "Extractor",
    "find_binary_root",
    "AcquisitionPipeline",
    "InstallationVerifier",
    "InstallResult",
    "Installer",
]
