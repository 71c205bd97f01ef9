"""
End-to-end installation run.

Resolves the requested version, acquires the distribution, exposes it on
the search path and verifies the installed executable.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hurlkit.cache.policy import ArtifactCache
from hurlkit.cache.store import LocalCacheStore
from hurlkit.config import InstallerConfig
from hurlkit.core.directory import get_install_dir
from hurlkit.core.runner import Runner
from hurlkit.install.pipeline import AcquisitionPipeline
from hurlkit.install.verifier import InstallationVerifier
from hurlkit.release.locator import DistributionLocator
from hurlkit.release.metadata import GitHubReleaseClient
from hurlkit.release.resolver import VersionResolver

logger = logging.getLogger(__name__)

OUTPUT_NAME = "hurl-bin"


@dataclass
class InstallResult:
    """Outcome of an installation run."""

    version: str
    install_dir: Path
    executable: Path
    from_cache: bool


class Installer:
    """
    Install hurl according to an InstallerConfig.

    Collaborators default to the real implementations built from the
    configuration and can be replaced for testing.

    Example:
        >>> installer = Installer(load_config({"version": "latest"}))
        >>> result = installer.run()
        >>> result.executable
        PosixPath('/tmp/hurl-4.3.0/hurl')
    """

    def __init__(
        self,
        config: InstallerConfig,
        runner: Optional[Runner] = None,
        resolver: Optional[VersionResolver] = None,
        pipeline: Optional[AcquisitionPipeline] = None,
        verifier: Optional[InstallationVerifier] = None,
    ):
        self.config = config
        self.runner = runner or Runner()
        self.resolver = resolver or VersionResolver(
            metadata=GitHubReleaseClient(
                token=config.github_token, api_url=config.api_url
            )
        )
        self.pipeline = pipeline or AcquisitionPipeline(
            locator=DistributionLocator(download_url=config.download_url),
            cache=ArtifactCache(
                service=LocalCacheStore(config.cache_dir),
                enabled=not config.disable_cache,
            ),
        )
        self.verifier = verifier or InstallationVerifier()

    def run(self, spec: Optional[str] = None) -> InstallResult:
        """
        Run the installation.

        Args:
            spec: Version specifier (configured version if None)

        Returns:
            InstallResult describing the installed executable

        Raises:
            HurlKitError: Any non-cache failure of a stage
        """
        spec = spec or self.config.version
        version = self.resolver.resolve(spec, self.config.github_token)
        install_dir = get_install_dir(version, self.config.install_root)

        with self.runner.group("Install hurl"):
            logger.info(f"Installing hurl {version} into {install_dir}")
            from_cache = self.pipeline.acquire(version, install_dir)
            self.runner.add_path(install_dir)

        with self.runner.group("Installation check"):
            executable = self.verifier.verify(
                self.config.executable_name,
                search_path=self.runner.environ.get("PATH"),
            )
            logger.info(f"hurl {version} available at {executable}")
            self.runner.set_output(OUTPUT_NAME, str(executable))

        return InstallResult(
            version=version,
            install_dir=install_dir,
            executable=executable,
            from_cache=from_cache,
        )


__all__ = [
    "OUTPUT_NAME",
    "InstallResult",
    "Installer",
]
