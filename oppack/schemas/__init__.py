"""
oppack.schemas - Data model for operator packages and instance plan status.

Package lifecycle:

PackageFiles -> PackageResources (Operator, OperatorVersion, Instance) -> PackageDigest

1. PackageFiles: raw package as read from operator.yaml, params.yaml and templates/
2. PackageResources: the installable objects compiled from a complete package
3. PackageDigest: compiled resources paired with the digest of their source

Instance status:

InstanceStatus -> PlanStatus -> PhaseStatus -> StepStatus
"""

from .operator import (
    Maintainer,
    OperatorMetadata,
    Phase,
    Plan,
    Step,
    Task,
    TaskKind,
)
from .parameter import Parameter
from .plan_status import (
    ExecutionStatus,
    InstanceStatus,
    PhaseStatus,
    PlanStatus,
    StepStatus,
    get_last_executed_plan_status,
)
from .resources import (
    API_VERSION,
    OPERATOR_LABEL,
    PROVENANCE_LABEL,
    PROVENANCE_LABEL_VALUE,
    Instance,
    InstanceSpec,
    ObjectMeta,
    ObjectReference,
    Operator,
    OperatorSpec,
    OperatorVersion,
    OperatorVersionSpec,
)
from .package import (
    PackageDigest,
    PackageFiles,
    PackageResources,
)

__all__ = [
    # Operator metadata
    "Maintainer",
    "OperatorMetadata",
    "Phase",
    "Plan",
    "Step",
    "Task",
    "TaskKind",
    # Parameters
    "Parameter",
    # Plan status
    "ExecutionStatus",
    "InstanceStatus",
    "PhaseStatus",
    "PlanStatus",
    "StepStatus",
    "get_last_executed_plan_status",
    # Resources
    "API_VERSION",
    "OPERATOR_LABEL",
    "PROVENANCE_LABEL",
    "PROVENANCE_LABEL_VALUE",
    "Instance",
    "InstanceSpec",
    "ObjectMeta",
    "ObjectReference",
    "Operator",
    "OperatorSpec",
    "OperatorVersion",
    "OperatorVersionSpec",
    # Package
    "PackageDigest",
    "PackageFiles",
    "PackageResources",
]
