"""
Batch loader - digest, parse and compile many package sources.

Each source is handled on its own. A source that cannot be read, parsed or
compiled is reported with a warning and left out of the result; the rest of
the batch carries on.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Optional

from oppack.errors import OppackError
from oppack.schemas import PackageDigest

from .compiler import PackageCompiler
from .readers import package_files_from_bytes, sha256_digest

logger = logging.getLogger(__name__)

Opener = Callable[[str], BinaryIO]


def _open_binary(path: str) -> BinaryIO:
    return open(path, "rb")


class PackageLoader:
    """
    Loads package tarballs into compiled resources.

    Usage:
        loader = PackageLoader()
        digests = loader.load_all(["kafka-1.0.0.tgz", "zookeeper-0.2.0.tgz"])
    """

    def __init__(
        self,
        compiler: Optional[PackageCompiler] = None,
        opener: Opener = _open_binary,
    ):
        """
        Initialize the loader.

        Args:
            compiler: Compiler used for every package
            opener: Opens a source path for binary reading
        """
        self._compiler = compiler or PackageCompiler()
        self._opener = opener

    def load(self, path: str | Path) -> PackageDigest:
        """
        Load a single package tarball.

        Raises:
            OSError: If the source cannot be read
            OppackError: If the package is invalid
        """
        with self._opener(str(path)) as stream:
            digest, data = sha256_digest(stream)

        package = package_files_from_bytes(data)
        resources = self._compiler.compile(package)
        return PackageDigest(resources=resources, digest=digest)

    def load_all(self, paths: Iterable[str | Path]) -> list[PackageDigest]:
        """
        Load every package, skipping invalid ones.

        Returns:
            Digests of the valid packages, in input order
        """
        digests: list[PackageDigest] = []
        for path in paths:
            try:
                digests.append(self.load(path))
            except (OppackError, OSError) as e:
                logger.warning(f"operator: {path} is invalid: {e}")
                continue
        return digests


def load_all(
    paths: Iterable[str | Path],
    compiler: Optional[PackageCompiler] = None,
    opener: Opener = _open_binary,
) -> list[PackageDigest]:
    """Convenience function for PackageLoader(...).load_all(paths)."""
    return PackageLoader(compiler=compiler, opener=opener).load_all(paths)
