"""
Compiler - Transform a PackageFiles bundle into installable resources.

The compiler:
- checks the bundle is complete (operator.yaml and params.yaml were read)
- validates every task against the template set, reporting all violations
- builds the Operator, OperatorVersion and Instance objects

Compilation is a pure function of the bundle and the instance name suffix.
The suffix comes from an injected generator so tests can fix it.
"""

import logging
import random
from typing import Callable, Optional

from oppack.errors import MissingPackageFileError, TaskValidationError
from oppack.schemas import (
    OPERATOR_LABEL,
    PROVENANCE_LABEL,
    PROVENANCE_LABEL_VALUE,
    Instance,
    InstanceSpec,
    ObjectMeta,
    ObjectReference,
    Operator,
    OperatorMetadata,
    OperatorSpec,
    OperatorVersion,
    OperatorVersionSpec,
    PackageFiles,
    PackageResources,
)

from .validation import DEFAULT_POLICY, ValidationPolicy, validate_tasks

logger = logging.getLogger(__name__)

NameGenerator = Callable[[], str]

INSTANCE_SUFFIX_LENGTH = 6

# Consonants and digits only, so generated names never spell words
_SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"


def random_suffix(length: int = INSTANCE_SUFFIX_LENGTH) -> str:
    """Random lowercase alphanumeric suffix for instance names."""
    return "".join(random.choices(_SUFFIX_ALPHABET, k=length))


def operator_version_name(operator_name: str, version: str) -> str:
    return f"{operator_name}-{version}"


def _labels(**extra: str) -> dict[str, str]:
    return {PROVENANCE_LABEL: PROVENANCE_LABEL_VALUE, **extra}


class PackageCompiler:
    """
    Compiler for transforming PackageFiles into PackageResources.

    Usage:
        compiler = PackageCompiler()
        resources = compiler.compile(package_files)

        # deterministic instance names
        compiler = PackageCompiler(name_generator=lambda: "abc123")
    """

    def __init__(
        self,
        name_generator: Optional[NameGenerator] = None,
        policy: ValidationPolicy = DEFAULT_POLICY,
        namespace: Optional[str] = None,
    ):
        """
        Initialize the compiler.

        Args:
            name_generator: Produces the instance name suffix
            policy: Task validation policy
            namespace: Namespace set on every compiled resource, if any
        """
        self._name_generator = name_generator or random_suffix
        self._policy = policy
        self._namespace = namespace

    def compile(self, package: PackageFiles) -> PackageResources:
        """
        Compile a package into its installable resources.

        Args:
            package: A parsed package bundle

        Returns:
            The Operator, OperatorVersion and Instance for the package

        Raises:
            MissingPackageFileError: If operator.yaml or params.yaml was not read
            TaskValidationError: If any task references a missing template
        """
        if package.operator is None:
            raise MissingPackageFileError("operator.yaml file is missing")
        if package.params is None:
            raise MissingPackageFileError("params.yaml file is missing")

        violations = validate_tasks(package.operator.tasks, package.templates, self._policy)
        if violations:
            raise TaskValidationError(violations)

        metadata = package.operator
        ov_name = operator_version_name(metadata.name, metadata.version)

        resources = PackageResources(
            operator=self._compile_operator(metadata),
            operator_version=self._compile_operator_version(metadata, package, ov_name),
            instance=self._compile_instance(metadata, ov_name),
        )
        logger.debug(
            f"compiled package {metadata.name}: operatorversion={ov_name}, "
            f"instance={resources.instance.name}"
        )
        return resources

    def _compile_operator(self, metadata: OperatorMetadata) -> Operator:
        return Operator(
            metadata=ObjectMeta(name=metadata.name, namespace=self._namespace, labels=_labels()),
            spec=OperatorSpec(
                description=metadata.description,
                kudo_version=metadata.kudo_version,
                kubernetes_version=metadata.kubernetes_version,
                maintainers=metadata.maintainers,
                url=metadata.url,
            ),
        )

    def _compile_operator_version(
        self,
        metadata: OperatorMetadata,
        package: PackageFiles,
        name: str,
    ) -> OperatorVersion:
        return OperatorVersion(
            metadata=ObjectMeta(name=name, namespace=self._namespace, labels=_labels()),
            spec=OperatorVersionSpec(
                operator=ObjectReference(name=metadata.name, kind="Operator"),
                version=metadata.version,
                templates=dict(package.templates),
                tasks=metadata.tasks,
                parameters=tuple(package.params or ()),
                plans=dict(metadata.plans),
                upgradable_from=None,
            ),
        )

    def _compile_instance(self, metadata: OperatorMetadata, ov_name: str) -> Instance:
        return Instance(
            metadata=ObjectMeta(
                name=f"{metadata.name}-{self._name_generator()}",
                namespace=self._namespace,
                labels=_labels(**{OPERATOR_LABEL: metadata.name}),
            ),
            spec=InstanceSpec(operator_version=ObjectReference(name=ov_name)),
        )


def compile_package(
    package: PackageFiles,
    name_generator: Optional[NameGenerator] = None,
    policy: ValidationPolicy = DEFAULT_POLICY,
    namespace: Optional[str] = None,
) -> PackageResources:
    """Convenience function to compile a package with a one-off compiler."""
    return PackageCompiler(name_generator=name_generator, policy=policy, namespace=namespace).compile(package)
