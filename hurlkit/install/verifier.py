"""
Installation verification.

Checks that the installed hurl executable is the one found on the search
path and that it runs.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from hurlkit.core.exceptions import ExecutableNotFoundError, VerificationError

logger = logging.getLogger(__name__)


class InstallationVerifier:
    """
    Verify that an executable is reachable and runnable.

    Example:
        >>> InstallationVerifier().verify()
        PosixPath('/tmp/hurl-4.3.0/hurl')
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize verifier.

        Args:
            timeout: Timeout in seconds for the version check (None waits
                for the process to exit)
        """
        self.timeout = timeout

    def verify(
        self, executable_name: str = "hurl", search_path: Optional[str] = None
    ) -> Path:
        """
        Locate ``executable_name`` and run ``<executable> --version``.

        Args:
            executable_name: Executable to look up
            search_path: PATH-style search path (current PATH if None)

        Returns:
            Absolute path of the executable

        Raises:
            ExecutableNotFoundError: If the executable is not on the search path
            VerificationError: If it cannot be run or exits with non-zero status
        """
        found = shutil.which(executable_name, path=search_path)
        if not found:
            raise ExecutableNotFoundError(executable_name)

        executable = Path(found).absolute()
        logger.debug(f"Found {executable_name} at {executable}")

        try:
            result = subprocess.run(
                [str(executable), "--version"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise VerificationError(
                f"{executable} --version timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise VerificationError(f"Failed to run {executable}: {e}") from e

        if result.returncode != 0:
            raise VerificationError(
                f"{executable} --version exited with status {result.returncode}"
            )

        logger.debug(f"{executable_name} --version: {result.stdout.strip()}")
        return executable


__all__ = ["InstallationVerifier"]
