import io
import tarfile

import pytest
import yaml


OPERATOR = {
    "name": "kafka",
    "version": "2.11-2.4.0",
    "appVersion": "2.4.0",
    "kudoVersion": "0.8.0",
    "kubernetesVersion": "1.15.0",
    "description": "Apache Kafka",
    "url": "https://kafka.apache.org/",
    "maintainers": [{"name": "Jane Doe", "email": "jane@example.com"}],
    "tasks": [
        {"name": "app", "kind": "Apply", "spec": {"resources": ["service.yaml", "statefulset.yaml"]}},
        {"name": "cleanup", "kind": "Delete", "spec": {"resources": ["service.yaml"]}},
        {"name": "noop", "kind": "Dummy", "spec": {"done": True}},
    ],
    "plans": {
        "deploy": {
            "strategy": "serial",
            "phases": [
                {"name": "main", "strategy": "parallel", "steps": [{"name": "everything", "tasks": ["app"]}]},
            ],
        },
    },
}

PARAMS = {
    "BROKER_COUNT": {"description": "number of brokers", "default": "3", "displayName": "Brokers"},
    "ZOOKEEPER_URI": {"description": "zookeeper connection", "required": "false", "trigger": "deploy"},
}

TEMPLATES = {
    "service.yaml": "apiVersion: v1\nkind: Service\n",
    "statefulset.yaml": "apiVersion: apps/v1\nkind: StatefulSet\n",
}


@pytest.fixture
def package_source():
    """(path, bytes) pairs of a valid package rooted at kafka/."""
    files = [
        ("kafka/operator.yaml", yaml.safe_dump(OPERATOR).encode()),
        ("kafka/params.yaml", yaml.safe_dump(PARAMS).encode()),
    ]
    files += [(f"kafka/templates/{name}", text.encode()) for name, text in TEMPLATES.items()]
    return files


def make_tarball(files) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for path, data in files:
            info = tarfile.TarInfo(name=path)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


@pytest.fixture
def package_tarball(package_source):
    return make_tarball(package_source)


@pytest.fixture
def package_dir(tmp_path, package_source):
    for path, data in package_source:
        target = tmp_path / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return tmp_path / "kafka"


@pytest.fixture
def tarball_of():
    """Build a gzip tarball from (path, bytes) pairs."""
    return make_tarball
