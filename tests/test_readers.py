"""Tests for oppack.packages.readers."""

import hashlib
import io

import pytest

from oppack.errors import PackageError
from oppack.packages.readers import (
    files_from_directory,
    files_from_tarball,
    package_files_from_bytes,
    package_files_from_path,
    sha256_digest,
)


def test_sha256_digest_returns_hash_and_content():
    data = b"x" * 10000
    digest, content = sha256_digest(io.BytesIO(data))
    assert digest == hashlib.sha256(data).hexdigest()
    assert content == data


def test_files_from_tarball(package_source, package_tarball):
    assert dict(files_from_tarball(package_tarball)) == dict(package_source)


def test_files_from_tarball_rejects_garbage():
    with pytest.raises(PackageError, match="failed to read package archive"):
        list(files_from_tarball(b"definitely not a tarball"))


def test_files_from_directory(package_dir):
    paths = [path for path, _ in files_from_directory(package_dir)]
    assert paths == [
        "operator.yaml",
        "params.yaml",
        "templates/service.yaml",
        "templates/statefulset.yaml",
    ]


def test_package_from_bytes(package_tarball):
    package = package_files_from_bytes(package_tarball)
    assert package.operator.name == "kafka"
    assert package.is_complete


def test_package_from_directory_and_tarball_agree(tmp_path, package_dir, package_tarball):
    tarball = tmp_path / "kafka.tgz"
    tarball.write_bytes(package_tarball)
    assert package_files_from_path(package_dir) == package_files_from_path(tarball)
