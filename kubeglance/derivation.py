"""
Status derivation functions.

Pure functions that compute presentation-ready values from a single record.
Nothing here reads the clock: every function that needs the current time
takes it as an explicit `now` argument, so the output is fully determined by
its inputs.

Key Functions:
- format_duration / format_uptime: Elapsed time as "2d 3h 4m", "3h 4m" or "4m"
- status_severity / status_icon: Severity class and icon for a pod status
- display_status: Pod phase, or the waiting reason of a stuck container
- restart_summary: Restart count, severity and time since the last restart
- health_summary / health_text: Ready, PodScheduled and Initialized conditions
- statefulset_owner: Owning StatefulSet from the owner references
- select_primary_container: The application's main container
- replica_severity / overall_health: StatefulSet and overall verdicts
- derive_pod_summary: All of the above for one pod

Example:
    ```python
    now = datetime.now(timezone.utc)
    summary = derive_pod_summary(pod, now, ("jenkins", "cloudbees"))
    print(summary.uptime, summary.restarts.severity)
    ```
"""

from datetime import datetime
from typing import List, Optional, Sequence

from .constants import (
    SEVERITY_OK, SEVERITY_WARN, SEVERITY_ERROR, SEVERITY_INFO, SEVERITY_MUTED,
    STATUS_ICONS, WAITING_REASONS, RESTARTS_ERROR_ABOVE, RESTARTS_WARN_ABOVE,
    CONDITION_READY, CONDITION_SCHEDULED, CONDITION_INITIALIZED,
    HEALTHY, DEGRADED, UNHEALTHY, PHASE_UNKNOWN
)
from .models import (
    Condition, ContainerLine, ContainerStatus, DerivedPodSummary, HealthFragment,
    OwnerReference, PodRecord, RestartSummary
)

_STATUS_SEVERITY = {
    "Running": SEVERITY_OK,
    "Pending": SEVERITY_WARN,
    "ContainerCreating": SEVERITY_WARN,
    "Failed": SEVERITY_ERROR,
    "CrashLoopBackOff": SEVERITY_ERROR,
    "ImagePullBackOff": SEVERITY_ERROR,
    "Succeeded": SEVERITY_INFO,
}

NOT_AVAILABLE = "N/A"
UNSCHEDULED = "Unscheduled"
UNKNOWN = "unknown"


def format_duration(start: datetime, now: datetime) -> str:
    """
    Format the time elapsed between `start` and `now`.

    Returns "{d}d {h}h {m}m" when at least a day has passed, "{h}h {m}m" when
    at least an hour has passed, and "{m}m" otherwise. A start time in the
    future counts as zero elapsed time.

    Example:
        ```python
        format_duration(now - timedelta(minutes=65), now)  # "1h 5m"
        ```
    """
    seconds = max(int((now - start).total_seconds()), 0)
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes = rem // 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_uptime(start: Optional[datetime], now: datetime) -> str:
    """Uptime since `start`, or "N/A" if the pod has not started."""
    if start is None:
        return NOT_AVAILABLE
    return format_duration(start, now)


def status_severity(status: Optional[str]) -> str:
    """Map a pod status to a severity class; unrecognized values are muted."""
    return _STATUS_SEVERITY.get(status or "", SEVERITY_MUTED)


def status_icon(status: Optional[str]) -> str:
    return STATUS_ICONS.get(status or "", STATUS_ICONS[PHASE_UNKNOWN])


def display_status(pod: PodRecord) -> str:
    """Pod phase, replaced by the waiting reason of the first stuck container."""
    for container in pod.containers:
        if container.waiting_reason in WAITING_REASONS:
            return container.waiting_reason
    return pod.phase or PHASE_UNKNOWN


def restart_summary(count: int, last_restart: Optional[datetime], now: datetime) -> RestartSummary:
    """
    Summarize the restarts of a container.

    Zero restarts is reported as neutral regardless of any termination
    timestamp. Otherwise the severity is error above 5 restarts, warn above 2
    and info below that, and the time since the last restart is included
    ("unknown" if the cluster did not report one).
    """
    count = max(count, 0)
    if count == 0:
        return RestartSummary(count=0, severity=SEVERITY_OK)

    if count > RESTARTS_ERROR_ABOVE:
        severity = SEVERITY_ERROR
    elif count > RESTARTS_WARN_ABOVE:
        severity = SEVERITY_WARN
    else:
        severity = SEVERITY_INFO

    since = format_duration(last_restart, now) if last_restart else UNKNOWN
    return RestartSummary(count=count, severity=severity, since_last=since)


def _find_condition(conditions: Sequence[Condition], kind: str) -> Optional[Condition]:
    return next((c for c in conditions if c.type == kind), None)


def health_summary(conditions: Optional[Sequence[Condition]]) -> List[HealthFragment]:
    """
    Summarize pod conditions into health fragments.

    Ready is reported whenever present, satisfied or not. PodScheduled and
    Initialized are only reported when satisfied. The result is never empty:
    a pod without conditions yields "No health data", and one whose
    conditions don't qualify yields "Unknown".
    """
    if not conditions:
        return [HealthFragment(label="No health data", satisfied=None, severity=SEVERITY_MUTED)]

    fragments = []
    ready = _find_condition(conditions, CONDITION_READY)
    if ready is not None:
        ok = ready.status == "True"
        fragments.append(HealthFragment(
            label="Ready", satisfied=ok, severity=SEVERITY_OK if ok else SEVERITY_ERROR
        ))

    scheduled = _find_condition(conditions, CONDITION_SCHEDULED)
    if scheduled is not None and scheduled.status == "True":
        fragments.append(HealthFragment(label="Scheduled", satisfied=True, severity=SEVERITY_OK))

    initialized = _find_condition(conditions, CONDITION_INITIALIZED)
    if initialized is not None and initialized.status == "True":
        fragments.append(HealthFragment(label="Initialized", satisfied=True, severity=SEVERITY_OK))

    if not fragments:
        fragments.append(HealthFragment(label="Unknown", satisfied=None, severity=SEVERITY_MUTED))
    return fragments


def fragment_text(fragment: HealthFragment) -> str:
    if fragment.satisfied is None:
        return fragment.label
    return f"{fragment.label}: {'✅' if fragment.satisfied else '❌'}"


def health_text(conditions: Optional[Sequence[Condition]]) -> str:
    """Plain-text health summary, fragments joined with " | "."""
    return " | ".join(fragment_text(f) for f in health_summary(conditions))


def statefulset_owner(owner_references: Optional[Sequence[OwnerReference]]) -> Optional[str]:
    """Name of the owning StatefulSet, or None if the pod isn't StatefulSet-owned."""
    for ref in owner_references or []:
        if ref.kind == "StatefulSet":
            return ref.name
    return None


def select_primary_container(
    containers: Sequence[ContainerStatus],
    hints: Sequence[str]
) -> Optional[ContainerStatus]:
    """
    Pick the application's main container.

    Hints are tried in order; for each one the first container whose name
    contains it wins. Without a match the first container is used, and None
    is returned for a pod without container statuses.

    Hint order takes priority over container order: with hints
    ("jenkins", "cloudbees"), containers [cloudbees-sidecar, jenkins] select
    jenkins.
    """
    for hint in hints:
        for container in containers:
            if hint in container.name:
                return container
    return containers[0] if containers else None


def short_image(image: str) -> str:
    """Image reference without registry and repository path."""
    return image.rsplit('/', 1)[-1]


def replica_severity(ready: int, desired: int) -> str:
    if ready == desired:
        return SEVERITY_OK
    if ready == 0:
        return SEVERITY_ERROR
    return SEVERITY_WARN


def overall_health(total: int, running: int, failed: int) -> str:
    """HEALTHY if every pod runs, UNHEALTHY if any failed, DEGRADED otherwise."""
    if total > 0 and running == total:
        return HEALTHY
    if failed > 0:
        return UNHEALTHY
    return DEGRADED


def derive_pod_summary(pod: PodRecord, now: datetime, hints: Sequence[str]) -> DerivedPodSummary:
    """Compute every presentation value for one pod."""
    status = display_status(pod)
    owner = statefulset_owner(pod.owner_references)
    primary = select_primary_container(pod.containers, hints)

    restarts = restart_summary(
        primary.restart_count if primary else 0,
        primary.last_terminated_at if primary else None,
        now,
    )

    return DerivedPodSummary(
        name=pod.name,
        status=status,
        phase=pod.phase,
        severity=status_severity(status),
        icon=status_icon(status),
        node=pod.node or UNSCHEDULED,
        uptime=format_uptime(pod.start_time, now),
        restarts=restarts,
        health=health_summary(pod.conditions),
        statefulset=owner,
        claim_names=list(pod.claim_names) if owner else [],
        containers=[
            ContainerLine(name=c.name, ready=c.ready, image=short_image(c.image))
            for c in pod.containers
        ],
    )
