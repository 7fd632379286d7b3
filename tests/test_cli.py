"""Tests for the oppack CLI."""

import pytest
import yaml
from click.testing import CliRunner

from oppack.cli import main


@pytest.fixture(autouse=True)
def oppack_home(monkeypatch, tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("OPPACK_HOME", str(home))
    return home


@pytest.fixture
def runner():
    return CliRunner()


class TestVerify:

    def test_valid_directory(self, runner, package_dir):
        result = runner.invoke(main, ["verify", str(package_dir)])
        assert result.exit_code == 0, result.output
        assert "operator.kudo.dev/kafka" in result.output
        assert "operatorversion.kudo.dev/kafka-2.11-2.4.0" in result.output
        assert "instance.kudo.dev/kafka-" in result.output

    def test_valid_tarball_yaml_output(self, runner, tmp_path, package_tarball):
        path = tmp_path / "kafka.tgz"
        path.write_bytes(package_tarball)

        result = runner.invoke(main, ["verify", str(path), "--output", "yaml"])

        assert result.exit_code == 0, result.output
        manifests = list(yaml.safe_load_all(result.output))
        assert [m["kind"] for m in manifests] == ["Operator", "OperatorVersion", "Instance"]

    def test_missing_template(self, runner, package_dir):
        (package_dir / "templates" / "service.yaml").unlink()

        result = runner.invoke(main, ["verify", str(package_dir)])

        assert result.exit_code == 1
        assert "task app missing template: service.yaml" in result.output
        assert "task cleanup missing template: service.yaml" in result.output

    def test_strict_config_rejects_unknown_kind(self, runner, oppack_home, package_dir):
        (oppack_home / "config.yaml").write_text("strict_task_kinds: true\n")
        operator = yaml.safe_load((package_dir / "operator.yaml").read_text())
        operator["tasks"].append({"name": "pipe", "kind": "Pipe"})
        (package_dir / "operator.yaml").write_text(yaml.safe_dump(operator))

        result = runner.invoke(main, ["verify", str(package_dir)])

        assert result.exit_code == 1
        assert "unsupported kind: Pipe" in result.output

    def test_invalid_config(self, runner, oppack_home, package_dir):
        (oppack_home / "config.yaml").write_text("log_format: xml\n")
        result = runner.invoke(main, ["verify", str(package_dir)])
        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_wrongly_typed_config(self, runner, oppack_home, package_dir):
        (oppack_home / "config.yaml").write_text("log_level: 5\n")
        result = runner.invoke(main, ["verify", str(package_dir)])
        assert result.exit_code == 1
        assert "Invalid config: log_level must be a string" in result.output

    def test_namespace_from_config(self, runner, oppack_home, package_dir):
        (oppack_home / "config.yaml").write_text("namespace: streaming\n")
        result = runner.invoke(main, ["verify", str(package_dir), "--output", "yaml"])
        assert result.exit_code == 0, result.output
        manifests = list(yaml.safe_load_all(result.output))
        assert {m["metadata"]["namespace"] for m in manifests} == {"streaming"}


class TestLoad:

    def test_reports_valid_count(self, runner, tmp_path, package_source, tarball_of):
        good = tmp_path / "kafka.tgz"
        good.write_bytes(tarball_of(package_source))
        bad = tmp_path / "bad.tgz"
        bad.write_bytes(tarball_of(package_source + [("kafka/extra.txt", b"x")]))

        result = runner.invoke(main, ["load", str(good), str(bad), str(tmp_path / "missing.tgz")])

        assert result.exit_code == 0, result.output
        assert "1 of 3 packages valid" in result.output


class TestPlanStatus:

    def test_selects_in_progress_plan(self, runner, tmp_path):
        path = tmp_path / "instance.yaml"
        path.write_text(yaml.safe_dump({
            "apiVersion": "kudo.dev/v1alpha1",
            "kind": "Instance",
            "metadata": {"name": "kafka-abc123"},
            "status": {"planStatus": {
                "deploy": {"status": "COMPLETE", "lastFinishedRun": "2019-10-17T01:01:01Z"},
                "upgrade": {
                    "status": "IN_PROGRESS",
                    "phases": [{"name": "main", "status": "IN_PROGRESS", "steps": [
                        {"name": "roll", "status": "IN_PROGRESS"},
                    ]}],
                },
            }},
        }))

        result = runner.invoke(main, ["plan-status", str(path)])

        assert result.exit_code == 0, result.output
        assert "plan: upgrade (IN_PROGRESS)" in result.output
        assert "phase main (IN_PROGRESS)" in result.output
        assert "step roll (IN_PROGRESS)" in result.output

    def test_bare_status_json(self, runner, tmp_path):
        path = tmp_path / "status.json"
        path.write_text('{"planStatus": {"deploy": {"status": "COMPLETE", "lastFinishedRun": "2019-10-17T01:01:01Z"}}}')

        result = runner.invoke(main, ["plan-status", str(path)])

        assert result.exit_code == 0, result.output
        assert "plan: deploy (COMPLETE)" in result.output
        assert "last finished: 2019-10-17T01:01:01+00:00" in result.output

    def test_nothing_ran(self, runner, tmp_path):
        path = tmp_path / "status.yaml"
        path.write_text("planStatus:\n  deploy:\n    status: NEVER_RUN\n")
        result = runner.invoke(main, ["plan-status", str(path)])
        assert result.exit_code == 0
        assert "no plan has run" in result.output

    def test_invalid_status(self, runner, tmp_path):
        path = tmp_path / "status.yaml"
        path.write_text("planStatus:\n  deploy:\n    status: EXPLODED\n")
        result = runner.invoke(main, ["plan-status", str(path)])
        assert result.exit_code == 1
        assert "Invalid instance status" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "oppack" in result.output
