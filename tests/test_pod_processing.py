from datetime import datetime, timezone

import pytest

from kubeglance.exceptions import ClusterQueryError, MalformedResponseError
from kubeglance.pod_processing import (
    container_from_document, parse_timestamp, pod_from_document, statefulset_from_document
)

from conftest import container_doc, pod_doc, statefulset_doc

# ----------------------------
# Timestamps
# ----------------------------


def test_parse_timestamp_zulu():
    assert parse_timestamp("2024-05-01T10:55:00Z") == datetime(2024, 5, 1, 10, 55, tzinfo=timezone.utc)


def test_parse_timestamp_offset_and_naive():
    assert parse_timestamp("2024-05-01T10:55:00+00:00").tzinfo is not None
    assert parse_timestamp(datetime(2024, 5, 1)).tzinfo == timezone.utc


def test_parse_timestamp_missing():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_parse_timestamp_garbage():
    with pytest.raises(MalformedResponseError):
        parse_timestamp("yesterday")
    with pytest.raises(MalformedResponseError):
        parse_timestamp(12345)


# ----------------------------
# Pods
# ----------------------------


def test_pod_from_document():
    pod = pod_from_document(pod_doc(
        start_time="2024-05-01T10:55:00Z",
        containers=[container_doc(restarts=2, finished_at="2024-05-01T11:50:00Z")],
        conditions=[{"type": "Ready", "status": "True"}],
        owners=[{"kind": "StatefulSet", "name": "cjoc", "uid": "abc"}],
        volumes=[
            {"name": "home", "persistentVolumeClaim": {"claimName": "jenkins-home-cjoc-0"}},
            {"name": "config", "configMap": {"name": "cjoc-config"}},
        ],
    ))

    assert pod.name == "cjoc-0"
    assert pod.namespace == "cloudbees-core"
    assert pod.phase == "Running"
    assert pod.node == "worker-1"
    assert pod.start_time == datetime(2024, 5, 1, 10, 55, tzinfo=timezone.utc)
    assert pod.owner_references[0].kind == "StatefulSet"
    assert pod.conditions[0].type == "Ready"
    assert pod.claim_names == ["jenkins-home-cjoc-0"]

    container = pod.containers[0]
    assert container.restart_count == 2
    assert container.last_terminated_at == datetime(2024, 5, 1, 11, 50, tzinfo=timezone.utc)


def test_pod_from_minimal_document():
    pod = pod_from_document({"metadata": {"name": "bare"}})
    assert pod.phase == "Unknown"
    assert pod.node is None
    assert pod.start_time is None
    assert pod.containers == []
    assert pod.conditions == []
    assert pod.owner_references == []


def test_pod_without_name_is_malformed():
    with pytest.raises(MalformedResponseError):
        pod_from_document({"metadata": {}})


def test_pod_with_wrong_shapes_is_malformed():
    with pytest.raises(ClusterQueryError):
        pod_from_document({"metadata": {"name": "p"}, "status": "Running"})
    with pytest.raises(ClusterQueryError):
        pod_from_document({"metadata": {"name": "p"}, "status": {"conditions": "Ready"}})
    with pytest.raises(ClusterQueryError):
        pod_from_document(["not", "a", "pod"])


def test_container_waiting_reason():
    container = container_from_document(container_doc(waiting="ImagePullBackOff"))
    assert container.waiting_reason == "ImagePullBackOff"
    assert container.last_terminated_at is None


def test_container_negative_restart_count_is_clamped():
    assert container_from_document(container_doc(restarts=-3)).restart_count == 0


def test_container_non_integer_restart_count_is_malformed():
    with pytest.raises(MalformedResponseError):
        container_from_document(container_doc(restarts="many"))


# ----------------------------
# StatefulSets
# ----------------------------


def test_statefulset_from_document():
    sts = statefulset_from_document(statefulset_doc(replicas=3, ready=2, current=3))
    assert (sts.name, sts.desired_replicas, sts.ready_replicas, sts.current_replicas) == ("cjoc", 3, 2, 3)


def test_statefulset_missing_counts_default_to_zero():
    sts = statefulset_from_document({"metadata": {"name": "cjoc"}, "spec": {}, "status": {}})
    assert (sts.desired_replicas, sts.ready_replicas, sts.current_replicas) == (0, 0, 0)


def test_statefulset_without_name_is_malformed():
    with pytest.raises(MalformedResponseError):
        statefulset_from_document({"spec": {"replicas": 1}})
