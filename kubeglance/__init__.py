"""
Kubeglance - Terminal status dashboard for Kubernetes workloads.

Kubeglance shows the pods and StatefulSets of one labeled application as a
colored report in the terminal. It queries the Kubernetes API, derives uptime,
restart and health information for every pod, and summarizes StatefulSet
replica counts into an overall health verdict.

Key Features:
- Pod and StatefulSet discovery by namespace and label selector
- Uptime and time-since-last-restart for the application's main container
- Condition-based health summary per pod
- Persistent volume claims for StatefulSet pods
- Overall HEALTHY / DEGRADED / UNHEALTHY verdict
- Watch mode refreshing every 30 seconds

Example:
    Single report:
    ```bash
    kubeglance
    ```

    Watch a different application:
    ```bash
    KUBEGLANCE_LABEL="app=cjoc" kubeglance --watch
    ```
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
