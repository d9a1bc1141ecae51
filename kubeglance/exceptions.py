"""
Custom exceptions for Kubeglance.

Exception Hierarchy:
- KubeglanceError: Base exception for all Kubeglance-specific errors
  - ClientUnavailableError: Raised when the Kubernetes client cannot be configured
  - ClusterQueryError: Raised when a pod or StatefulSet query fails
    - MalformedResponseError: Raised when a response cannot be parsed into records
  - ConfigurationError: Raised when there's a configuration issue

An empty query result is not an error: the fetcher returns an empty list.

Example:
    ```python
    try:
        pods, statefulsets = await fetch_resources(kube, "jenkins", "app=cjoc")
    except ClusterQueryError as e:
        print(f"Query failed: {e}")
    ```
"""


class KubeglanceError(Exception):
    """Base exception for Kubeglance errors."""
    pass


class ClientUnavailableError(KubeglanceError):
    """Raised when the Kubernetes client cannot be loaded or reached at all."""
    pass


class ClusterQueryError(KubeglanceError):
    """Raised when a cluster query fails for a reason other than 'no resources'."""
    pass


class MalformedResponseError(ClusterQueryError):
    """Raised when a query response does not have the expected resource shape."""
    pass


class ConfigurationError(KubeglanceError):
    """Raised when there's a configuration issue."""
    pass
