"""
Package readers - turn a package source into (path, content) pairs.

Packages are distributed as gzip tarballs and developed as directory trees.
Both readers yield the same (path, bytes) stream that the parser consumes.
"""

import hashlib
import io
import tarfile
from pathlib import Path
from typing import BinaryIO, Iterator

from oppack.errors import PackageError
from oppack.schemas import PackageFiles

from .parser import parse_package

_CHUNK_SIZE = 4096


def sha256_digest(stream: BinaryIO) -> tuple[str, bytes]:
    """
    Read a stream to the end and fingerprint it.

    Returns:
        (hex SHA256 digest, full content)
    """
    sha256 = hashlib.sha256()
    chunks = []
    for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
        sha256.update(chunk)
        chunks.append(chunk)
    return sha256.hexdigest(), b"".join(chunks)


def files_from_tarball(data: bytes) -> Iterator[tuple[str, bytes]]:
    """
    Iterate the regular files of a gzip tarball.

    Raises:
        PackageError: If data is not a readable gzip tarball
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
            for member in tar:
                if not member.isfile():
                    continue
                f = tar.extractfile(member)
                if f is None:
                    continue
                yield member.name, f.read()
    except (tarfile.TarError, EOFError, OSError) as e:
        raise PackageError(f"failed to read package archive: {e}")


def files_from_directory(root: Path | str) -> Iterator[tuple[str, bytes]]:
    """Iterate the regular files below root, as posix paths relative to root."""
    root = Path(root)
    for path in sorted(p for p in root.rglob("*") if p.is_file()):
        yield path.relative_to(root).as_posix(), path.read_bytes()


def package_files_from_bytes(data: bytes) -> PackageFiles:
    """Parse a gzip tarball package."""
    return parse_package(files_from_tarball(data))


def package_files_from_path(path: Path | str) -> PackageFiles:
    """Parse a package from a directory tree or a tarball file."""
    path = Path(path)
    if path.is_dir():
        return parse_package(files_from_directory(path))
    return package_files_from_bytes(path.read_bytes())
