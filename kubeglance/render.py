"""
Terminal rendering for Kubeglance reports.

Prints reports to a `rich` console. Severity classes from the derivation step
are mapped to terminal styles through `SEVERITY_STYLES`; all cluster-provided
strings are escaped before being embedded in markup.

Key Functions:
- render_header: Title panel with namespace, label selector and timestamp
- render_pod: Detail block for one pod
- render_summary: Summary panel, StatefulSet status and overall verdict
- render_report: Every pod block followed by the summary
- render_nothing_found, render_error, render_refresh_footer: Status lines
"""

from datetime import datetime
from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from .constants import (
    SEVERITY_STYLES, SEVERITY_OK, SEVERITY_WARN, SEVERITY_ERROR, SEVERITY_MUTED,
    STATUS_ICONS, STATEFULSET_POD_ICON, POD_ICON, HEALTHY, UNHEALTHY,
    COMMON_LABEL_SELECTORS, ENV_NAMESPACE, ENV_LABEL
)
from .derivation import fragment_text
from .models import DerivedPodSummary, HealthFragment, Report, ReportSummary, RestartSummary

SEPARATOR = "─" * 72

_VERDICT_SEVERITY = {HEALTHY: SEVERITY_OK, UNHEALTHY: SEVERITY_ERROR}
_VERDICT_ICON = {
    HEALTHY: STATUS_ICONS["Running"],
    UNHEALTHY: STATUS_ICONS["Failed"],
}


def styled(text: str, severity: str) -> str:
    """Escape `text` and wrap it in the markup style of a severity class."""
    style = SEVERITY_STYLES.get(severity, SEVERITY_STYLES[SEVERITY_MUTED])
    return f"[{style}]{escape(text)}[/{style}]"


def restart_markup(restarts: RestartSummary) -> str:
    if restarts.count == 0:
        return styled("No restarts", SEVERITY_OK)
    return (
        f"{styled(f'{restarts.count} restarts', restarts.severity)} "
        f"{styled(f'(last: {restarts.since_last} ago)', SEVERITY_MUTED)}"
    )


def health_markup(fragments: List[HealthFragment]) -> str:
    return " | ".join(styled(fragment_text(f), f.severity) for f in fragments)


def render_header(console: Console, namespace: str, label_selector: str, now: datetime) -> None:
    title = Text("🏗️  KUBEGLANCE POD MONITOR 🏗️", justify="center", style="bold")
    console.print(Panel(title, box=box.DOUBLE, border_style="blue"))
    console.print(
        f"[dim]Namespace: [cyan]{escape(namespace)}[/cyan] | "
        f"Label Selector: [cyan]{escape(label_selector)}[/cyan][/dim]"
    )
    console.print(f"[dim]Timestamp: [white]{now.astimezone():%Y-%m-%d %H:%M:%S}[/white][/dim]\n")


def render_searching(console: Console) -> None:
    console.print("[dim]🔍 Searching for pods and StatefulSets...[/dim]\n")


def render_pod(console: Console, pod: DerivedPodSummary) -> None:
    """Print the detail block of one pod."""
    if pod.is_statefulset_pod:
        icon, kind = STATEFULSET_POD_ICON, "StatefulSet Pod"
    else:
        icon, kind = POD_ICON, "Pod"

    console.print(f"[bold]{icon} {kind}: [cyan]{escape(pod.name)}[/cyan][/bold]")
    if pod.statefulset:
        console.print(f"   🏗️  StatefulSet: [magenta]{escape(pod.statefulset)}[/magenta]")
    console.print(f"   {pod.icon} Status: {styled(pod.status, pod.severity)}")
    console.print(f"   🖥️  Node: [white]{escape(pod.node)}[/white]")
    console.print(f"   ⏱️  Uptime: [green]{escape(pod.uptime)}[/green]")
    console.print(f"   🔄 Restarts: {restart_markup(pod.restarts)}")
    console.print(f"   🏥 Health: {health_markup(pod.health)}")

    if pod.claim_names:
        console.print("   💾 Persistent Volumes:")
        for claim in pod.claim_names:
            console.print(f"      • [yellow]{escape(claim)}[/yellow]")

    if pod.containers:
        console.print("   📋 Containers:")
        for c in pod.containers:
            state = "🟢 Ready" if c.ready else "🔴 Not Ready"
            console.print(f"      • [cyan]{escape(c.name)}[/cyan]: {state} ([dim]{escape(c.image)}[/dim])")

    console.print(f"[dim]   {SEPARATOR}[/dim]\n")


def render_summary(console: Console, summary: ReportSummary) -> None:
    """Print the summary panel, StatefulSet replica status and overall verdict."""
    lines = (
        f"Total Pods: [white]{summary.total:>3}[/white]  │  "
        f"Running: [green]{summary.running:>3}[/green]  │  "
        f"Pending: [yellow]{summary.pending:>3}[/yellow]  │  "
        f"Failed: [red]{summary.failed:>3}[/red]\n"
        f"StatefulSets: [magenta]{summary.statefulset_count:>2}[/magenta]   │  "
        f"StatefulSet Pods: [cyan]{summary.statefulset_pods:>3}[/cyan]"
    )
    console.print(Panel(lines, title="SUMMARY", box=box.DOUBLE, border_style="blue"))

    if summary.statefulsets:
        console.print("\n[bold]📊 StatefulSet Status:[/bold]")
        for sts in summary.statefulsets:
            counts = styled(f"{sts.ready}/{sts.desired} ready", sts.severity)
            console.print(f"   • [cyan]{escape(sts.name)}[/cyan]: {counts} ({sts.current} current)")

    severity = _VERDICT_SEVERITY.get(summary.verdict, SEVERITY_WARN)
    icon = _VERDICT_ICON.get(summary.verdict, STATUS_ICONS["Pending"])
    console.print(f"\n[bold]Overall Status: {styled(summary.verdict, severity)}[/bold] {icon}\n")


def render_report(console: Console, report: Report) -> None:
    for pod in report.pods:
        render_pod(console, pod)
    render_summary(console, report.summary)


def render_nothing_found(console: Console, namespace: str, label_selector: str) -> None:
    console.print(
        f"[yellow]⚠️  No resources found in namespace '{escape(namespace)}' "
        f"with label '{escape(label_selector)}'[/yellow]"
    )
    console.print(f"[dim]Try adjusting the {ENV_NAMESPACE} or {ENV_LABEL} environment variables[/dim]")
    console.print(f"[dim]Common label selectors: {escape(', '.join(COMMON_LABEL_SELECTORS))}[/dim]")


def render_error(console: Console, exc: BaseException) -> None:
    """Print a failure as a single red line."""
    message = str(exc).splitlines()[0] if str(exc) else exc.__class__.__name__
    console.print(f"[red]❌ Error: {escape(message)}[/red]")


def render_refresh_footer(console: Console, interval: float) -> None:
    console.print(f"[dim]🔄 Refreshing in {interval:g} seconds... (Press Ctrl+C to exit)[/dim]")
