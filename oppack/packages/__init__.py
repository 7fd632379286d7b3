"""
oppack.packages - Read, validate and compile operator packages.

(path, bytes) -> classify -> parse -> PackageFiles -> validate -> compile -> PackageResources
"""

from .classifier import FileKind, PackageFile, classify
from .compiler import PackageCompiler, compile_package, random_suffix
from .loader import PackageLoader, load_all
from .parser import parse_bool, parse_package, parse_package_file
from .readers import (
    files_from_directory,
    files_from_tarball,
    package_files_from_bytes,
    package_files_from_path,
    sha256_digest,
)
from .validation import (
    DEFAULT_POLICY,
    STRICT_POLICY,
    ValidationPolicy,
    validate_task,
    validate_tasks,
)

__all__ = [
    "FileKind",
    "PackageFile",
    "classify",
    "PackageCompiler",
    "compile_package",
    "random_suffix",
    "PackageLoader",
    "load_all",
    "parse_bool",
    "parse_package",
    "parse_package_file",
    "files_from_directory",
    "files_from_tarball",
    "package_files_from_bytes",
    "package_files_from_path",
    "sha256_digest",
    "DEFAULT_POLICY",
    "STRICT_POLICY",
    "ValidationPolicy",
    "validate_task",
    "validate_tasks",
]
