"""Tests for oppack.schemas serialization."""

import pytest

from oppack.schemas import (
    Maintainer,
    OperatorMetadata,
    PackageFiles,
    Parameter,
    Plan,
    Step,
    Task,
    TaskKind,
)


class TestTaskKind:

    def test_values_match_operator_file_spelling(self):
        assert [k.value for k in TaskKind] == ["Apply", "Delete", "Dummy"]
        assert TaskKind.APPLY == "Apply"


class TestOperatorMetadata:

    def test_defaults(self):
        operator = OperatorMetadata.from_dict({"name": "x"})
        assert operator.version == ""
        assert operator.tasks == ()
        assert operator.plans == {}
        assert operator.maintainers == ()

    def test_to_dict_uses_file_keys(self, package_source):
        import yaml

        data = yaml.safe_load(dict(package_source)["kafka/operator.yaml"])
        operator = OperatorMetadata.from_dict(data)
        result = operator.to_dict()
        assert result["appVersion"] == "2.4.0"
        assert result["kubernetesVersion"] == "1.15.0"
        assert result["plans"]["deploy"]["phases"][0]["strategy"] == "parallel"
        assert OperatorMetadata.from_dict(result) == operator

    def test_numeric_version_is_rejected(self):
        with pytest.raises(ValueError, match="version must be a string, got float"):
            OperatorMetadata.from_dict({"name": "x", "version": 1.1})

    def test_step_delete_flag(self):
        step = Step.from_dict({"name": "s", "tasks": ["cleanup"], "delete": True})
        assert step.delete is True
        assert Step.from_dict({"name": "s"}).delete is False

    @pytest.mark.parametrize("value", ["false", "true", 0, 1])
    def test_step_delete_must_be_boolean(self, value):
        with pytest.raises(ValueError, match="delete of step s must be a boolean"):
            Step.from_dict({"name": "s", "delete": value})

    def test_plan_strategy_defaults_to_serial(self):
        plan = Plan.from_dict({"phases": [{"name": "p", "steps": [{"name": "s", "tasks": ["t"]}]}]})
        assert plan.strategy == "serial"
        assert plan.phases[0].strategy == "serial"

    def test_resources_must_be_a_list(self):
        with pytest.raises(ValueError, match="resources of task t"):
            Task.from_dict({"name": "t", "kind": "Apply", "spec": {"resources": "a.yaml"}})

    def test_maintainer_must_be_mapping(self):
        with pytest.raises(ValueError, match="maintainer must be a mapping"):
            Maintainer.from_dict("Jane")


class TestParameter:

    def test_to_dict_minimal(self):
        assert Parameter(name="A").to_dict() == {"name": "A", "required": True}

    def test_to_dict_full(self):
        p = Parameter(name="A", description="d", default="1", trigger="deploy",
                      required=False, display_name="Alpha")
        assert p.to_dict() == {
            "name": "A",
            "required": False,
            "description": "d",
            "default": "1",
            "trigger": "deploy",
            "displayName": "Alpha",
        }


class TestPackageFiles:

    def test_new_bundle_is_incomplete(self):
        assert not PackageFiles().is_complete

    def test_empty_params_counts_as_read(self):
        assert PackageFiles(operator=OperatorMetadata(name="x"), params=[]).is_complete
