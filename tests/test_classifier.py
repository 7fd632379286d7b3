"""Tests for oppack.packages.classifier."""

import pytest

from oppack.packages.classifier import FileKind, classify, template_name


class TestClassify:

    @pytest.mark.parametrize("path", ["operator.yaml", "kafka/operator.yaml", "./pkg/operator.yaml"])
    def test_operator_file(self, path):
        assert classify(path).kind == FileKind.OPERATOR

    @pytest.mark.parametrize("path", ["params.yaml", "kafka/params.yaml"])
    def test_params_file(self, path):
        assert classify(path).kind == FileKind.PARAMS

    def test_template_file(self):
        result = classify("kafka/templates/foo.yaml")
        assert result.kind == FileKind.TEMPLATE
        assert result.template_name == "foo.yaml"

    def test_nested_template_keeps_subdirectory(self):
        result = classify("kafka/templates/sub/foo.yaml")
        assert result.kind == FileKind.TEMPLATE
        assert result.template_name == "sub/foo.yaml"

    def test_template_named_after_last_templates_dir(self):
        result = classify("templates/pkg/templates/bar.yaml")
        assert result.template_name == "bar.yaml"

    def test_operator_rule_wins_over_template_rule(self):
        assert classify("kafka/templates/operator.yaml").kind == FileKind.OPERATOR

    def test_template_rule_wins_over_params_rule(self):
        result = classify("kafka/templates/params.yaml")
        assert result.kind == FileKind.TEMPLATE
        assert result.template_name == "params.yaml"

    @pytest.mark.parametrize("path", ["README.md", "kafka/templates/notes.txt", "", "kafka/values.yaml"])
    def test_unknown(self, path):
        result = classify(path)
        assert result.kind == FileKind.UNKNOWN
        assert result.template_name is None

    def test_keeps_original_path(self):
        assert classify("kafka/operator.yaml").path == "kafka/operator.yaml"


def test_template_name_without_marker_is_unchanged():
    assert template_name("foo.yaml") == "foo.yaml"
