"""
Integration with the process that runs hurlkit.

Publishes the results of an installation run to the calling environment:
- the install directory is prepended to ``PATH`` for the rest of the run
- named outputs (e.g. ``hurl-bin``) are recorded
- related log lines are wrapped in collapsible groups

When running under GitHub Actions the workflow-command files
(``$GITHUB_PATH``, ``$GITHUB_OUTPUT``) and ``::group::`` markers are used so
later workflow steps see the same results; elsewhere only the current
process environment and the log are affected.
"""

import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class Runner:
    """
    Environment the installer reports to.

    Args:
        environ: Environment mapping to read and update (default: os.environ)
        stream: Stream receiving workflow commands (default: sys.stdout)
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None, stream=None):
        self.environ = os.environ if environ is None else environ
        self.stream = stream
        self.outputs: Dict[str, str] = {}

    @property
    def is_github_actions(self) -> bool:
        """True when running inside a GitHub Actions job."""
        return self.environ.get("GITHUB_ACTIONS", "").lower() == "true"

    def _write_command(self, line: str):
        stream = self.stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def _append_to_file(self, env_var: str, line: str) -> bool:
        target = self.environ.get(env_var)
        if not target:
            return False
        with open(target, "a", encoding="utf-8") as f:
            f.write(line + "\n")
        return True

    def add_path(self, directory: Union[str, Path]):
        """
        Prepend ``directory`` to the executable search path.

        Args:
            directory: Directory containing executables
        """
        directory = str(directory)
        current = self.environ.get("PATH", "")
        self.environ["PATH"] = (
            directory + os.pathsep + current if current else directory
        )

        if self._append_to_file("GITHUB_PATH", directory):
            logger.debug(f"Added {directory} to GITHUB_PATH")
        logger.debug(f"Added {directory} to PATH")

    def set_output(self, name: str, value: str):
        """
        Record a named output value.

        Args:
            name: Output name (e.g., 'hurl-bin')
            value: Output value
        """
        if "\n" in value:
            raise ValueError(f"Output '{name}' must be a single line")
        self.outputs[name] = value
        if self._append_to_file("GITHUB_OUTPUT", f"{name}={value}"):
            logger.debug(f"Wrote output {name} to GITHUB_OUTPUT")
        logger.debug(f"Output {name}={value}")

    @contextmanager
    def group(self, title: str):
        """
        Context manager wrapping log output in a collapsible group.

        Example:
            >>> with runner.group("Install hurl"):
            ...     logger.info("Downloading...")
        """
        if self.is_github_actions:
            self._write_command(f"::group::{title}")
        else:
            logger.info(f"== {title} ==")
        try:
            yield
        finally:
            if self.is_github_actions:
                self._write_command("::endgroup::")


__all__ = ["Runner"]
