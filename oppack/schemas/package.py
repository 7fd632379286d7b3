"""
Package schemas - the raw package bundle and what it compiles into.

PackageFiles -> PackageResources -> PackageDigest

1. PackageFiles: the files of a package as read from a tarball or directory
2. PackageResources: the Operator, OperatorVersion and Instance compiled from it
3. PackageDigest: compiled resources paired with the digest of their source
"""

from dataclasses import dataclass, field
from typing import Optional

from .operator import OperatorMetadata
from .parameter import Parameter
from .resources import Instance, Operator, OperatorVersion


@dataclass
class PackageFiles:
    """
    The raw operator package format, accumulated file by file.

    Attributes:
        operator: Parsed operator.yaml, None until it has been read
        templates: Template name (path relative to templates/) -> template text
        params: Parsed params.yaml, None until it has been read. An empty list
            means params.yaml was read and declares no parameters.
    """
    operator: Optional[OperatorMetadata] = None
    templates: dict[str, str] = field(default_factory=dict)
    params: Optional[list[Parameter]] = None

    @property
    def is_complete(self) -> bool:
        return self.operator is not None and self.params is not None


@dataclass(frozen=True)
class PackageResources:
    """The three installable objects compiled from one package."""
    operator: Operator
    operator_version: OperatorVersion
    instance: Instance

    def to_list(self) -> list[dict]:
        """Manifests in install order."""
        return [
            self.operator.to_dict(),
            self.operator_version.to_dict(),
            self.instance.to_dict(),
        ]


@dataclass(frozen=True)
class PackageDigest:
    """Compiled package resources and the SHA256 digest of the package source."""
    resources: PackageResources
    digest: str
