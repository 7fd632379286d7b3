"""
Cluster client contract.

The client that talks to the cluster API server lives outside this package.
ClusterClient describes what oppack needs from it; the functions below are
the checks and request bodies built on top of that contract.
"""

import logging
from typing import Any, Optional, Protocol

from oppack.errors import VersionError
from oppack.schemas import OPERATOR_LABEL, Instance, Operator, OperatorVersion
from oppack.version import Version

logger = logging.getLogger(__name__)


class ClusterClient(Protocol):
    """
    CRUD access to operator objects in a cluster.

    Lookups return None when the object does not exist; every other failure
    is raised by the implementation.
    """

    def create_operator(self, obj: Operator, namespace: str) -> Operator: ...

    def create_operator_version(self, obj: OperatorVersion, namespace: str) -> OperatorVersion: ...

    def create_instance(self, obj: Instance, namespace: str) -> Instance: ...

    def get_operator(self, name: str, namespace: str) -> Optional[Operator]: ...

    def get_instance(self, name: str, namespace: str) -> Optional[Instance]: ...

    def get_operator_version(self, name: str, namespace: str) -> Optional[OperatorVersion]: ...

    def list_instances(self, namespace: str, label_selector: Optional[str] = None) -> list[Instance]: ...

    def list_operator_versions(self, namespace: str) -> list[OperatorVersion]: ...

    def patch_instance(self, name: str, namespace: str, patch: dict[str, Any]) -> None: ...

    def delete_instance(self, name: str, namespace: str) -> None: ...

    def server_version(self) -> str: ...


def operator_exists(client: ClusterClient, name: str, namespace: str) -> bool:
    """Check whether an Operator object is installed."""
    if client.get_operator(name, namespace) is None:
        logger.debug(f"operator.kudo.dev/{name} does not exist")
        return False
    logger.debug(f"operator.kudo.dev/{name} unchanged")
    return True


def instance_exists(
    client: ClusterClient,
    operator_name: str,
    namespace: str,
    version: str,
    instance_name: str,
) -> bool:
    """
    Check whether instance_name exists for the given operator version.

    Instances are found by their operator label, then matched on both the
    instance name and the OperatorVersion they reference.
    """
    selector = f"{OPERATOR_LABEL}={operator_name}"
    expected_ov = f"{operator_name}-{version}"
    for instance in client.list_instances(namespace, label_selector=selector):
        if instance.name == instance_name and instance.spec.operator_version.name == expected_ov:
            return True
    return False


def instance_names(client: ClusterClient, namespace: str, operator_name: Optional[str] = None) -> list[str]:
    """Names of instances in namespace, optionally only those of one operator."""
    selector = f"{OPERATOR_LABEL}={operator_name}" if operator_name else None
    return [i.name for i in client.list_instances(namespace, label_selector=selector)]


def operator_versions_installed(client: ClusterClient, operator_name: str, namespace: str) -> list[str]:
    """Versions of operator_name that have an OperatorVersion in namespace."""
    return [
        ov.spec.version
        for ov in client.list_operator_versions(namespace)
        if ov.spec.operator.name == operator_name
    ]


def instance_patch(
    operator_version_name: Optional[str] = None,
    parameters: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """
    Merge-patch body updating an instance's OperatorVersion and/or parameters.

    Fields left as None are not part of the patch.
    """
    spec: dict[str, Any] = {}
    if operator_version_name is not None:
        spec["operatorVersion"] = {"name": operator_version_name}
    if parameters is not None:
        spec["parameters"] = dict(parameters)
    return {"spec": spec}


def update_instance(
    client: ClusterClient,
    instance_name: str,
    namespace: str,
    operator_version_name: Optional[str] = None,
    parameters: Optional[dict[str, str]] = None,
) -> None:
    """Patch an instance to a new OperatorVersion and/or parameter values."""
    client.patch_instance(
        instance_name,
        namespace,
        instance_patch(operator_version_name, parameters),
    )


def validate_server_for_operator(client: ClusterClient, operator: Operator) -> None:
    """
    Check the cluster is recent enough for operator.

    Raises:
        VersionError: If either version cannot be parsed, or the operator
            needs a newer major/minor than the cluster runs
    """
    try:
        expected = Version.parse(operator.spec.kubernetes_version)
    except VersionError as e:
        raise VersionError(f"unable to parse operators kubernetes version: {e}")

    server = Version.parse(client.server_version())
    if expected.compare_major_minor(server) > 0:
        raise VersionError(
            f"expected kubernetes version of {expected} is not supported with version: {server}"
        )
