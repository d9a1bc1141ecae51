"""
Resource document parsing utilities.

This module turns Kubernetes resource documents (the camelCase JSON shape
returned by `kubectl get -o json` and by `ApiClient.sanitize_for_serialization`)
into the records defined in `kubeglance.models`. Optional fields are filled
with empty values; a document that lacks its identity or carries values of
the wrong type raises MalformedResponseError.

Key Functions:
- parse_timestamp: Parse an RFC 3339 timestamp into an aware datetime
- container_from_document: Parse one entry of status.containerStatuses
- pod_from_document: Convert a pod document into a PodRecord
- statefulset_from_document: Convert a StatefulSet document into a StatefulSetRecord

Example:
    ```python
    pod = pod_from_document(doc)
    print(f"Pod {pod.name} has {len(pod.containers)} containers")
    ```
"""

from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from .exceptions import MalformedResponseError
from .models import (
    ContainerStatus, Condition, OwnerReference, PodRecord, StatefulSetRecord
)


def _section(doc: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = doc.get(key) or {}
    if not isinstance(value, dict):
        raise MalformedResponseError(f"Expected object for '{key}', got {type(value).__name__}")
    return value


def _items(doc: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    value = doc.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise MalformedResponseError(f"Expected list of objects for '{key}'")
    return value


def _count(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedResponseError(f"Expected integer for {what}, got {value!r}")
    return max(value, 0)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp ("2024-05-01T12:00:00Z") into an aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str):
            raise MalformedResponseError(f"Invalid timestamp: {value!r}")
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid timestamp {value!r}: {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def container_from_document(doc: Dict[str, Any]) -> ContainerStatus:
    """Parse one entry of status.containerStatuses."""
    name = doc.get('name')
    if not name:
        raise MalformedResponseError("Container status without a name")

    last_state = _section(doc, 'lastState')
    terminated = _section(last_state, 'terminated')
    waiting = _section(_section(doc, 'state'), 'waiting')

    return ContainerStatus(
        name=name,
        image=doc.get('image') or "",
        ready=bool(doc.get('ready')),
        restart_count=_count(doc.get('restartCount'), f"restartCount of {name}"),
        last_terminated_at=parse_timestamp(terminated.get('finishedAt')),
        waiting_reason=waiting.get('reason'),
    )


def pod_from_document(doc: Dict[str, Any]) -> PodRecord:
    """Convert a pod document into a PodRecord."""
    if not isinstance(doc, dict):
        raise MalformedResponseError(f"Expected pod object, got {type(doc).__name__}")

    metadata = _section(doc, 'metadata')
    spec = _section(doc, 'spec')
    status = _section(doc, 'status')

    name = metadata.get('name')
    if not name:
        raise MalformedResponseError("Pod without metadata.name")

    owners = [
        OwnerReference(kind=ref.get('kind') or "", name=ref.get('name') or "")
        for ref in _items(metadata, 'ownerReferences')
    ]
    conditions = [
        Condition(type=c.get('type') or "", status=str(c.get('status') or ""))
        for c in _items(status, 'conditions')
    ]
    claims = []
    for volume in _items(spec, 'volumes'):
        claim = volume.get('persistentVolumeClaim')
        if isinstance(claim, dict) and claim.get('claimName'):
            claims.append(claim['claimName'])

    return PodRecord(
        name=name,
        namespace=metadata.get('namespace') or "",
        phase=status.get('phase') or "Unknown",
        node=spec.get('nodeName') or None,
        start_time=parse_timestamp(status.get('startTime')),
        owner_references=owners,
        containers=[container_from_document(c) for c in _items(status, 'containerStatuses')],
        conditions=conditions,
        claim_names=claims,
    )


def statefulset_from_document(doc: Dict[str, Any]) -> StatefulSetRecord:
    """Convert a StatefulSet document into a StatefulSetRecord."""
    if not isinstance(doc, dict):
        raise MalformedResponseError(f"Expected StatefulSet object, got {type(doc).__name__}")

    name = _section(doc, 'metadata').get('name')
    if not name:
        raise MalformedResponseError("StatefulSet without metadata.name")
    spec = _section(doc, 'spec')
    status = _section(doc, 'status')

    return StatefulSetRecord(
        name=name,
        desired_replicas=_count(spec.get('replicas'), f"spec.replicas of {name}"),
        ready_replicas=_count(status.get('readyReplicas'), f"status.readyReplicas of {name}"),
        current_replicas=_count(status.get('currentReplicas'), f"status.currentReplicas of {name}"),
    )
