"""
Constants and configuration defaults for Kubeglance.

Constants are organized by category:
- Environment variables: Names of the variables read by the CLI
- Target defaults: Namespace, label selector and container hints
- Refresh: Watch mode interval
- Severity classes: Semantic color classes and their terminal styles
- Icons: Status and pod type indicators
- Logging: Default log level and format
"""

# Environment variables
ENV_NAMESPACE = "KUBEGLANCE_NAMESPACE"
ENV_LABEL = "KUBEGLANCE_LABEL"
ENV_CONTAINER_HINTS = "KUBEGLANCE_CONTAINER_HINTS"
ENV_LOG_LEVEL = "KUBEGLANCE_LOG_LEVEL"

# Target defaults
DEFAULT_NAMESPACE = "cloudbees-core"
DEFAULT_LABEL_SELECTOR = "app.kubernetes.io/name=cloudbees-core"
DEFAULT_CONTAINER_HINTS = ("jenkins", "cloudbees")
COMMON_LABEL_SELECTORS = ("app.kubernetes.io/name=cloudbees-core", "app=cjoc", "app=jenkins")

# Refresh interval (in seconds)
DEFAULT_REFRESH_SECONDS = 30.0
MIN_REFRESH_SECONDS = 1.0

# Severity classes
SEVERITY_OK = "ok"
SEVERITY_WARN = "warn"
SEVERITY_ERROR = "error"
SEVERITY_INFO = "info"
SEVERITY_MUTED = "muted"

SEVERITY_STYLES = {
    SEVERITY_OK: "green",
    SEVERITY_WARN: "yellow",
    SEVERITY_ERROR: "red",
    SEVERITY_INFO: "cyan",
    SEVERITY_MUTED: "dim",
}

# Restart thresholds
RESTARTS_ERROR_ABOVE = 5
RESTARTS_WARN_ABOVE = 2

# Pod phases and container sub-states
PHASE_RUNNING = "Running"
PHASE_PENDING = "Pending"
PHASE_FAILED = "Failed"
PHASE_SUCCEEDED = "Succeeded"
PHASE_UNKNOWN = "Unknown"
WAITING_REASONS = ("ContainerCreating", "CrashLoopBackOff", "ImagePullBackOff")

STATUS_ICONS = {
    "Running": "🟢",
    "Pending": "🟡",
    "Failed": "🔴",
    "Succeeded": "✅",
    "Unknown": "❓",
    "ContainerCreating": "🔄",
    "CrashLoopBackOff": "💥",
    "ImagePullBackOff": "📥",
}

STATEFULSET_POD_ICON = "📊"
POD_ICON = "📦"

# Overall verdicts
HEALTHY = "HEALTHY"
DEGRADED = "DEGRADED"
UNHEALTHY = "UNHEALTHY"

# Health conditions
CONDITION_READY = "Ready"
CONDITION_SCHEDULED = "PodScheduled"
CONDITION_INITIALIZED = "Initialized"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"
