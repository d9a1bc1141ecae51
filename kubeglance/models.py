"""
Data models for Kubeglance.

This module defines the data structures used throughout the Kubeglance
pipeline. Raw Kubernetes documents are parsed into records, records are
turned into derived summaries, and derived summaries are aggregated into a
report that the renderer prints.

Key Models:
- MonitorConfig: Target namespace, label selector and refresh settings
- ContainerStatus: Status of one container in a pod
- Condition: A named pod health signal
- OwnerReference: Back-link from a pod to its controller
- PodRecord: Snapshot of one pod
- StatefulSetRecord: Snapshot of one StatefulSet
- RestartSummary, HealthFragment, ContainerLine: Derived presentation values
- DerivedPodSummary: Everything the renderer needs for one pod
- StatefulSetStatus, ReportSummary, Report: Aggregated report data

All records are snapshots: they are recreated on every fetch and never
mutated afterwards.

Example:
    ```python
    pod = PodRecord(
        name="cjoc-0",
        namespace="cloudbees-core",
        phase="Running",
        containers=[ContainerStatus(name="jenkins", image="cloudbees/cjoc:2.4", ready=True)],
    )
    ```
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_NAMESPACE, DEFAULT_LABEL_SELECTOR, DEFAULT_CONTAINER_HINTS,
    DEFAULT_REFRESH_SECONDS
)


@dataclass
class MonitorConfig:
    """
    Monitoring target and refresh configuration.

    Built once by the CLI from environment variables and flags, then passed
    explicitly to the fetcher, the derivation functions and the renderer.

    Attributes:
        namespace: Kubernetes namespace to query
        label_selector: Label selector scoping both queries (e.g. "app=cjoc")
        container_hints: Ordered substrings identifying the application's main container
        refresh_interval: Seconds to wait between cycles in watch mode
        kubeconfig: Path to kubeconfig (None for default loading rules)
        context: Kube context override

    Example:
        ```python
        config = MonitorConfig(namespace="jenkins", label_selector="app=jenkins")
        ```
    """
    namespace: str = DEFAULT_NAMESPACE
    label_selector: str = DEFAULT_LABEL_SELECTOR
    container_hints: Tuple[str, ...] = DEFAULT_CONTAINER_HINTS
    refresh_interval: float = DEFAULT_REFRESH_SECONDS
    kubeconfig: Optional[str] = None
    context: Optional[str] = None


@dataclass
class ContainerStatus:
    """
    Status of a single container in a pod.

    Attributes:
        name: Container name
        image: Container image reference (e.g. "docker.io/cloudbees/cloudbees-core-mm:2.4")
        ready: Whether the container passes its readiness checks
        restart_count: Number of container restarts (never negative)
        last_terminated_at: When the previous instance of the container finished
        waiting_reason: Reason the container is waiting (e.g. "CrashLoopBackOff")
    """
    name: str
    image: str = ""
    ready: bool = False
    restart_count: int = 0
    last_terminated_at: Optional[datetime] = None
    waiting_reason: Optional[str] = None


@dataclass
class Condition:
    """Named pod health signal, e.g. Condition(type="Ready", status="True")."""
    type: str
    status: str


@dataclass
class OwnerReference:
    """Controller that created a resource."""
    kind: str
    name: str


@dataclass
class PodRecord:
    """
    Snapshot of a Kubernetes pod.

    Every field except the name may be missing in the cluster's response; the
    parser fills in empty values and the derivation functions supply display
    fallbacks for them.

    Attributes:
        name: Pod name
        namespace: Kubernetes namespace
        phase: Pod phase (Running, Pending, Failed, Succeeded, Unknown)
        node: Node the pod is scheduled on
        start_time: When the kubelet started the pod
        owner_references: Controllers owning the pod
        containers: Container statuses
        conditions: Pod conditions
        claim_names: Persistent volume claims mounted by the pod

    Example:
        ```python
        pod = PodRecord(
            name="jenkins-0",
            namespace="cloudbees-core",
            phase="Running",
            node="worker-1",
            owner_references=[OwnerReference(kind="StatefulSet", name="jenkins")],
            claim_names=["jenkins-home-jenkins-0"],
        )
        ```
    """
    name: str
    namespace: str = ""
    phase: str = "Unknown"
    node: Optional[str] = None
    start_time: Optional[datetime] = None
    owner_references: List[OwnerReference] = field(default_factory=list)
    containers: List[ContainerStatus] = field(default_factory=list)
    conditions: List[Condition] = field(default_factory=list)
    claim_names: List[str] = field(default_factory=list)


@dataclass
class StatefulSetRecord:
    """
    Snapshot of a Kubernetes StatefulSet.

    Attributes:
        name: StatefulSet name
        desired_replicas: Replicas requested in the spec
        ready_replicas: Replicas passing readiness checks
        current_replicas: Replicas created from the current revision

    Example:
        ```python
        sts = StatefulSetRecord(name="cjoc", desired_replicas=1, ready_replicas=1, current_replicas=1)
        ```
    """
    name: str
    desired_replicas: int = 0
    ready_replicas: int = 0
    current_replicas: int = 0


@dataclass
class RestartSummary:
    """Restart count with severity and time since the last restart ("unknown" if not reported)."""
    count: int
    severity: str
    since_last: Optional[str] = None


@dataclass
class HealthFragment:
    """One piece of the health summary, e.g. label="Ready", satisfied=True."""
    label: str
    satisfied: Optional[bool]
    severity: str


@dataclass
class ContainerLine:
    name: str
    ready: bool
    image: str


@dataclass
class DerivedPodSummary:
    """
    Presentation-ready values for one pod.

    Computed fresh for every render from a PodRecord and a reference time.

    Attributes:
        name: Pod name
        status: Display status (phase, or a container waiting reason)
        phase: Raw pod phase, used for summary counts
        severity: Severity class of the display status
        icon: Status icon
        node: Node name or "Unscheduled"
        uptime: Formatted uptime or "N/A"
        restarts: Restart summary of the primary container
        health: Health fragments (never empty)
        statefulset: Owning StatefulSet name, None for other pods
        claim_names: Persistent volume claims (StatefulSet pods only)
        containers: One line per container
    """
    name: str
    status: str
    phase: str
    severity: str
    icon: str
    node: str
    uptime: str
    restarts: RestartSummary
    health: List[HealthFragment]
    statefulset: Optional[str] = None
    claim_names: List[str] = field(default_factory=list)
    containers: List[ContainerLine] = field(default_factory=list)

    @property
    def is_statefulset_pod(self) -> bool:
        return self.statefulset is not None


@dataclass
class StatefulSetStatus:
    name: str
    ready: int
    desired: int
    current: int
    severity: str


@dataclass
class ReportSummary:
    """
    Aggregate counts for the summary block.

    Attributes:
        total: Number of pods
        running: Pods in phase Running
        pending: Pods in phase Pending
        failed: Pods in phase Failed
        statefulset_count: Number of StatefulSets found
        statefulset_pods: Pods owned by a StatefulSet
        statefulsets: Replica status per StatefulSet
        verdict: HEALTHY, DEGRADED or UNHEALTHY
    """
    total: int
    running: int
    pending: int
    failed: int
    statefulset_count: int
    statefulset_pods: int
    statefulsets: List[StatefulSetStatus]
    verdict: str


@dataclass
class Report:
    """Everything printed for one refresh cycle."""
    namespace: str
    label_selector: str
    generated_at: datetime
    pods: List[DerivedPodSummary]
    summary: ReportSummary
