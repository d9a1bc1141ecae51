import io
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from kubernetes import client
from rich.console import Console

from kubeglance.kube import KubeContext

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def ago(**kwargs) -> str:
    return iso(NOW - timedelta(**kwargs))


def pod_doc(
    name="cjoc-0",
    phase="Running",
    node="worker-1",
    start_time=None,
    containers=None,
    conditions=None,
    owners=None,
    volumes=None,
):
    """Pod document in the shape returned by `kubectl get pods -o json`."""
    doc = {
        "metadata": {"name": name, "namespace": "cloudbees-core"},
        "spec": {},
        "status": {"phase": phase},
    }
    if node:
        doc["spec"]["nodeName"] = node
    if start_time:
        doc["status"]["startTime"] = start_time
    if containers is not None:
        doc["status"]["containerStatuses"] = containers
    if conditions is not None:
        doc["status"]["conditions"] = conditions
    if owners is not None:
        doc["metadata"]["ownerReferences"] = owners
    if volumes is not None:
        doc["spec"]["volumes"] = volumes
    return doc


def container_doc(name="jenkins", image="docker.io/cloudbees/cloudbees-cloud-core-oc:2.426", ready=True,
                  restarts=0, finished_at=None, waiting=None):
    doc = {"name": name, "image": image, "ready": ready, "restartCount": restarts}
    if finished_at:
        doc["lastState"] = {"terminated": {"finishedAt": finished_at, "reason": "Error"}}
    if waiting:
        doc["state"] = {"waiting": {"reason": waiting}}
    return doc


def statefulset_doc(name="cjoc", replicas=1, ready=None, current=None):
    status = {}
    if ready is not None:
        status["readyReplicas"] = ready
    if current is not None:
        status["currentReplicas"] = current
    return {"metadata": {"name": name}, "spec": {"replicas": replicas}, "status": status}


class FakeCore:
    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.calls = []

    def list_namespaced_pod(self, namespace, label_selector):
        self.calls.append((namespace, label_selector))
        if self.error:
            raise self.error
        return SimpleNamespace(items=self.items)


class FakeApps:
    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.calls = []

    def list_namespaced_stateful_set(self, namespace, label_selector):
        self.calls.append((namespace, label_selector))
        if self.error:
            raise self.error
        return SimpleNamespace(items=self.items)


def make_kube(pods=None, statefulsets=None, pod_error=None, sts_error=None) -> KubeContext:
    return KubeContext(
        FakeCore(pods, pod_error),
        FakeApps(statefulsets, sts_error),
        client.ApiClient(),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=140, color_system=None, force_terminal=False)


def output(console: Console) -> str:
    return console.file.getvalue()
