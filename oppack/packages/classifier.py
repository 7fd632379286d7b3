"""
Package file classification.

Every file of a package is exactly one of:
- operator.yaml: the operator metadata
- templates/**.yaml: a resource template, keyed by its path below templates/
- params.yaml: the parameter definitions

Anything else is UNKNOWN and makes the package invalid.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

OPERATOR_FILE_NAME = "operator.yaml"
PARAMS_FILE_NAME = "params.yaml"
TEMPLATES_DIR = "templates/"

TEMPLATE_FILE_PATTERN = re.compile(r"templates/.*.yaml")


class FileKind(str, Enum):
    OPERATOR = "operator"
    TEMPLATE = "template"
    PARAMS = "params"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PackageFile:
    """
    A classified package path.

    Attributes:
        path: Path as found in the package source
        kind: What the file is
        template_name: For templates, the key the template is stored under
    """
    path: str
    kind: FileKind
    template_name: Optional[str] = None


def template_name(path: str) -> str:
    """Strip everything up to and including the last templates/ in path."""
    return path.rsplit(TEMPLATES_DIR, 1)[-1]


def classify(path: str) -> PackageFile:
    """
    Classify a package path.

    Rules apply in order: operator.yaml suffix, template pattern, params.yaml
    suffix. The first match wins.
    """
    if path.endswith(OPERATOR_FILE_NAME):
        return PackageFile(path, FileKind.OPERATOR)
    if TEMPLATE_FILE_PATTERN.search(path):
        return PackageFile(path, FileKind.TEMPLATE, template_name(path))
    if path.endswith(PARAMS_FILE_NAME):
        return PackageFile(path, FileKind.PARAMS)
    return PackageFile(path, FileKind.UNKNOWN)
