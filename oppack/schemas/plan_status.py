"""
Plan status schemas - execution state of an instance's plans.

An instance tracks, per plan, the execution state of the plan and of each of
its phases and steps:

    PlanStatus -> PhaseStatus -> StepStatus

Each level moves never-run -> in-progress -> complete within one execution.
The reconciliation process that runs plans owns these transitions; this
module only models the state and selects the plan that is currently relevant.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class ExecutionStatus(str, Enum):
    """Execution state of a plan, phase or step."""
    NEVER_RUN = "NEVER_RUN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"

    @property
    def is_running(self) -> bool:
        return self == ExecutionStatus.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self == ExecutionStatus.COMPLETE


def _parse_time(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class StepStatus:
    name: str
    status: ExecutionStatus = ExecutionStatus.NEVER_RUN

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StepStatus":
        return cls(
            name=data["name"],
            status=ExecutionStatus(data.get("status", ExecutionStatus.NEVER_RUN.value)),
        )


@dataclass(frozen=True)
class PhaseStatus:
    name: str
    status: ExecutionStatus = ExecutionStatus.NEVER_RUN
    steps: tuple[StepStatus, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PhaseStatus":
        return cls(
            name=data["name"],
            status=ExecutionStatus(data.get("status", ExecutionStatus.NEVER_RUN.value)),
            steps=tuple(StepStatus.from_dict(s) for s in data.get("steps") or ()),
        )


@dataclass(frozen=True)
class PlanStatus:
    """
    Execution state of one plan.

    Attributes:
        name: Plan name
        status: Execution state of the plan as a whole
        phases: Ordered phase states
        last_finished_run: When the plan last completed, None if it never has
    """
    name: str
    status: ExecutionStatus = ExecutionStatus.NEVER_RUN
    phases: tuple[PhaseStatus, ...] = field(default_factory=tuple)
    last_finished_run: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "phases": [p.to_dict() for p in self.phases],
        }
        if self.last_finished_run is not None:
            result["lastFinishedRun"] = self.last_finished_run.isoformat()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanStatus":
        return cls(
            name=data["name"],
            status=ExecutionStatus(data.get("status", ExecutionStatus.NEVER_RUN.value)),
            phases=tuple(PhaseStatus.from_dict(p) for p in data.get("phases") or ()),
            last_finished_run=_parse_time(data.get("lastFinishedRun")),
        )


def _finished_after(candidate: PlanStatus, current: Optional[PlanStatus]) -> bool:
    if current is None:
        return True
    if candidate.last_finished_run is None:
        return False
    if current.last_finished_run is None:
        return True
    return candidate.last_finished_run > current.last_finished_run


def get_last_executed_plan_status(plan_status: Mapping[str, PlanStatus]) -> Optional[PlanStatus]:
    """
    Select the plan that is currently relevant for an instance.

    A plan in progress wins over everything else. Otherwise the completed plan
    that finished last is returned. When nothing is running and nothing ever
    completed, the result is None.

    Plans are visited in name order, so the result does not depend on mapping
    order: completed plans with equal finish times resolve to the smallest
    name. Only one plan should be in progress at a time; if several are, a
    warning is logged and the smallest name is returned.
    """
    names = sorted(plan_status)

    running = [plan_status[n] for n in names if plan_status[n].status.is_running]
    if running:
        if len(running) > 1:
            logger.warning(
                f"{len(running)} plans in progress at the same time: "
                f"{', '.join(p.name for p in running)}; selecting {running[0].name}"
            )
        return running[0]

    last_executed: Optional[PlanStatus] = None
    for name in names:
        plan = plan_status[name]
        if plan.status.is_finished and _finished_after(plan, last_executed):
            last_executed = plan
    return last_executed


@dataclass(frozen=True)
class InstanceStatus:
    """Status of an Instance: plan name -> plan execution state."""
    plan_status: dict[str, PlanStatus] = field(default_factory=dict)

    def last_executed_plan(self) -> Optional[PlanStatus]:
        return get_last_executed_plan_status(self.plan_status)

    def to_dict(self) -> dict[str, Any]:
        if not self.plan_status:
            return {}
        return {"planStatus": {name: p.to_dict() for name, p in self.plan_status.items()}}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "InstanceStatus":
        plans = (data or {}).get("planStatus") or {}
        return cls(plan_status={
            name: PlanStatus.from_dict({"name": name, **p}) for name, p in plans.items()
        })
