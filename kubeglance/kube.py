"""
Kubernetes client and API interactions for Kubeglance.

This module provides the interface between Kubeglance and the Kubernetes API.
It loads the client configuration and runs the two queries of a refresh
cycle: pods and StatefulSets matching a namespace and label selector.

Key Components:
- KubeContext: Container for Kubernetes API clients
- load_kube: Initialize Kubernetes client with config loading
- fetch_pods: List pods as PodRecords
- fetch_statefulsets: List StatefulSets as StatefulSetRecords
- fetch_resources: Run both queries concurrently

The blocking client calls run in the default executor. No matching resources
is a normal outcome and yields an empty list; every other failure is raised
as ClusterQueryError.

Example:
    ```python
    kube = await load_kube(kubeconfig=None, context=None)
    pods, statefulsets = await fetch_resources(kube, "cloudbees-core", "app=cjoc")
    ```
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from kubernetes import client, config
from kubernetes.client import ApiException
from urllib3.exceptions import HTTPError

from .exceptions import ClientUnavailableError, ClusterQueryError, MalformedResponseError
from .models import PodRecord, StatefulSetRecord
from .pod_processing import pod_from_document, statefulset_from_document

log = logging.getLogger('kubeglance')

T = TypeVar('T')


class KubeContext:
    """
    Container for Kubernetes API clients.

    Attributes:
        core: CoreV1Api client for pod operations
        apps: AppsV1Api client for StatefulSet operations
        api_client: ApiClient used to serialize responses into documents

    Example:
        ```python
        kube = await load_kube(kubeconfig, context)
        pods = await fetch_pods(kube, "cloudbees-core", "app=cjoc")
        ```
    """

    def __init__(self, core: client.CoreV1Api, apps: client.AppsV1Api, api_client: client.ApiClient):
        self.core = core
        self.apps = apps
        self.api_client = api_client


async def load_kube(kubeconfig: Optional[str], context: Optional[str]) -> KubeContext:
    """
    Load and initialize Kubernetes API clients.

    Uses the given kubeconfig and context when provided. Otherwise tries the
    default kubeconfig loading rules and falls back to in-cluster
    configuration.

    Args:
        kubeconfig: Path to kubeconfig file (optional, uses default if None)
        context: Kubernetes context name (optional, uses current context if None)

    Returns:
        KubeContext: Initialized context with all API clients

    Raises:
        ClientUnavailableError: If no usable configuration could be loaded
    """
    def _load():
        if kubeconfig or context:
            config.load_kube_config(config_file=kubeconfig, context=context)
        else:
            try:
                config.load_kube_config()
            except Exception:
                config.load_incluster_config()
        api = client.ApiClient()
        return client.CoreV1Api(api), client.AppsV1Api(api), api

    loop = asyncio.get_event_loop()
    try:
        core, apps, api = await loop.run_in_executor(None, _load)
    except Exception as e:
        raise ClientUnavailableError(f"Kubernetes client is not available: {e}") from e
    log.info("[kube] client configuration loaded")
    return KubeContext(core, apps, api)


def _list_documents(
    kube: KubeContext,
    call: Callable[..., Any],
    what: str,
    namespace: str,
    label_selector: str,
    parse: Callable[[Dict[str, Any]], T]
) -> List[T]:
    try:
        resp = call(namespace=namespace, label_selector=label_selector)
    except ApiException as e:
        if e.status == 404:
            log.debug(f"[kube] no {what} in namespace={namespace}")
            return []
        if e.status in (401, 403):
            raise ClusterQueryError(
                f"Not authorized to list {what} in namespace '{namespace}' ({e.status} {e.reason})"
            ) from e
        raise ClusterQueryError(f"Failed to list {what}: {e.status} {e.reason}") from e
    except (HTTPError, OSError) as e:
        raise ClusterQueryError(f"Kubernetes control plane unreachable: {e}") from e

    items = getattr(resp, 'items', None)
    if items is None:
        raise MalformedResponseError(f"Response for {what} has no items")

    try:
        docs = kube.api_client.sanitize_for_serialization(items)
    except Exception as e:
        raise MalformedResponseError(f"Could not serialize {what}: {e}") from e
    if not isinstance(docs, list):
        raise MalformedResponseError(f"Expected a list of {what}, got {type(docs).__name__}")

    records = [parse(d) for d in docs]
    log.debug(f"[kube] listed {len(records)} {what} namespace={namespace} selector={label_selector}")
    return records


async def fetch_pods(kube: KubeContext, namespace: str, label_selector: str) -> List[PodRecord]:
    """
    List pods matching the label selector.

    Returns:
        List[PodRecord]: Matching pods, empty if there are none

    Raises:
        ClusterQueryError: If the query fails or the response is malformed
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, _list_documents, kube, kube.core.list_namespaced_pod, "pods",
        namespace, label_selector, pod_from_document
    )


async def fetch_statefulsets(kube: KubeContext, namespace: str, label_selector: str) -> List[StatefulSetRecord]:
    """
    List StatefulSets matching the label selector.

    Returns:
        List[StatefulSetRecord]: Matching StatefulSets, empty if there are none

    Raises:
        ClusterQueryError: If the query fails or the response is malformed
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        None, _list_documents, kube, kube.apps.list_namespaced_stateful_set, "statefulsets",
        namespace, label_selector, statefulset_from_document
    )


async def fetch_resources(
    kube: KubeContext,
    namespace: str,
    label_selector: str
) -> Tuple[List[PodRecord], List[StatefulSetRecord]]:
    """Run the pod and StatefulSet queries concurrently; the first failure is raised."""
    pods, statefulsets = await asyncio.gather(
        fetch_pods(kube, namespace, label_selector),
        fetch_statefulsets(kube, namespace, label_selector),
    )
    return pods, statefulsets
