"""
Report aggregation utilities.

This module folds derived pod summaries and StatefulSet records into the
summary block of a report: pod counts by phase, StatefulSet replica status and
the overall health verdict.

Key Functions:
- statefulset_status: Replica counts and severity for one StatefulSet
- summarize: Aggregate counts and verdict
- build_report: Derive every pod and assemble the full report

Example:
    ```python
    report = build_report(pods, statefulsets, config, now)
    print(f"{report.summary.running}/{report.summary.total} running: {report.summary.verdict}")
    ```
"""

from datetime import datetime
from typing import List, Sequence

from .constants import PHASE_RUNNING, PHASE_PENDING, PHASE_FAILED
from .derivation import derive_pod_summary, overall_health, replica_severity
from .models import (
    DerivedPodSummary, MonitorConfig, PodRecord, Report, ReportSummary,
    StatefulSetRecord, StatefulSetStatus
)


def statefulset_status(sts: StatefulSetRecord) -> StatefulSetStatus:
    """Replica counts and severity for one StatefulSet."""
    return StatefulSetStatus(
        name=sts.name,
        ready=sts.ready_replicas,
        desired=sts.desired_replicas,
        current=sts.current_replicas,
        severity=replica_severity(sts.ready_replicas, sts.desired_replicas),
    )


def summarize(
    pods: Sequence[DerivedPodSummary],
    statefulsets: Sequence[StatefulSetRecord]
) -> ReportSummary:
    """Aggregate pod phases and StatefulSet status into the summary block."""
    total = len(pods)
    running = sum(1 for p in pods if p.phase == PHASE_RUNNING)
    pending = sum(1 for p in pods if p.phase == PHASE_PENDING)
    failed = sum(1 for p in pods if p.phase == PHASE_FAILED)

    return ReportSummary(
        total=total,
        running=running,
        pending=pending,
        failed=failed,
        statefulset_count=len(statefulsets),
        statefulset_pods=sum(1 for p in pods if p.is_statefulset_pod),
        statefulsets=[statefulset_status(s) for s in statefulsets],
        verdict=overall_health(total, running, failed),
    )


def build_report(
    pods: Sequence[PodRecord],
    statefulsets: Sequence[StatefulSetRecord],
    config: MonitorConfig,
    now: datetime
) -> Report:
    """Derive every pod and assemble the report for one cycle."""
    derived: List[DerivedPodSummary] = [
        derive_pod_summary(p, now, config.container_hints) for p in pods
    ]
    return Report(
        namespace=config.namespace,
        label_selector=config.label_selector,
        generated_at=now,
        pods=derived,
        summary=summarize(derived, statefulsets),
    )
