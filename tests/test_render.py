from kubeglance.derivation import derive_pod_summary
from kubeglance.models import MonitorConfig, StatefulSetRecord
from kubeglance.pod_processing import pod_from_document
from kubeglance.render import (
    render_error, render_header, render_nothing_found, render_pod, render_refresh_footer,
    render_report, render_summary, styled
)
from kubeglance.summary_processing import build_report, summarize

from conftest import NOW, ago, container_doc, output, pod_doc

HINTS = ("jenkins", "cloudbees")


def test_styled_escapes_markup():
    assert styled("[bold]x", "ok") == "[green]\\[bold]x[/green]"
    assert styled("x", "nonsense") == "[dim]x[/dim]"


def test_header(console):
    render_header(console, "cloudbees-core", "app.kubernetes.io/name=cloudbees-core", NOW)
    text = output(console)
    assert "KUBEGLANCE POD MONITOR" in text
    assert "Namespace: cloudbees-core" in text
    assert "Label Selector: app.kubernetes.io/name=cloudbees-core" in text
    assert "Timestamp: " in text


def test_statefulset_pod_block(console):
    pod = pod_from_document(pod_doc(
        name="cjoc-0",
        start_time=ago(hours=26, minutes=3),
        containers=[
            container_doc(name="jenkins", restarts=7, finished_at=ago(minutes=10)),
            container_doc(name="istio-proxy", image="docker.io/istio/proxyv2:1.20", ready=False),
        ],
        conditions=[{"type": "Ready", "status": "False"}, {"type": "PodScheduled", "status": "True"}],
        owners=[{"kind": "StatefulSet", "name": "cjoc"}],
        volumes=[{"name": "home", "persistentVolumeClaim": {"claimName": "jenkins-home-cjoc-0"}}],
    ))
    render_pod(console, derive_pod_summary(pod, NOW, HINTS))
    text = output(console)

    assert "📊 StatefulSet Pod: cjoc-0" in text
    assert "StatefulSet: cjoc" in text
    assert "🟢 Status: Running" in text
    assert "Node: worker-1" in text
    assert "Uptime: 1d 2h 3m" in text
    assert "7 restarts (last: 10m ago)" in text
    assert "Ready: ❌ | Scheduled: ✅" in text
    assert "Persistent Volumes:" in text
    assert "• jenkins-home-cjoc-0" in text
    assert "• jenkins: 🟢 Ready (cloudbees-cloud-core-oc:2.426)" in text
    assert "• istio-proxy: 🔴 Not Ready (proxyv2:1.20)" in text


def test_plain_pod_block_without_details(console):
    pod = pod_from_document({"metadata": {"name": "pending-pod"}, "status": {"phase": "Pending"}})
    render_pod(console, derive_pod_summary(pod, NOW, HINTS))
    text = output(console)

    assert "📦 Pod: pending-pod" in text
    assert "StatefulSet:" not in text
    assert "🟡 Status: Pending" in text
    assert "Node: Unscheduled" in text
    assert "Uptime: N/A" in text
    assert "No restarts" in text
    assert "Health: No health data" in text
    assert "Containers:" not in text


def test_summary_block(console):
    pods = [
        derive_pod_summary(pod_from_document(pod_doc(name="a", owners=[{"kind": "StatefulSet", "name": "cjoc"}])), NOW, HINTS),
        derive_pod_summary(pod_from_document(pod_doc(name="b", phase="Pending")), NOW, HINTS),
    ]
    statefulsets = [
        StatefulSetRecord("cjoc", 3, 3, 3),
        StatefulSetRecord("mm", 3, 1, 2),
    ]
    render_summary(console, summarize(pods, statefulsets))
    text = output(console)

    assert "SUMMARY" in text
    assert "Total Pods:   2" in text
    assert "Running:   1" in text
    assert "Pending:   1" in text
    assert "Failed:   0" in text
    assert "StatefulSets:  2" in text
    assert "StatefulSet Pods:   1" in text
    assert "• cjoc: 3/3 ready (3 current)" in text
    assert "• mm: 1/3 ready (2 current)" in text
    assert "Overall Status: DEGRADED 🟡" in text


def test_report_renders_pods_then_summary(console):
    pods = [pod_from_document(pod_doc(name="cjoc-0")), pod_from_document(pod_doc(name="mm-0"))]
    render_report(console, build_report(pods, [], MonitorConfig(), NOW))
    text = output(console)

    assert text.index("cjoc-0") < text.index("mm-0") < text.index("SUMMARY")
    assert "Overall Status: HEALTHY 🟢" in text
    assert "StatefulSet Status" not in text


def test_unhealthy_verdict(console):
    pods = [derive_pod_summary(pod_from_document(pod_doc(phase="Failed")), NOW, HINTS)]
    render_summary(console, summarize(pods, []))
    assert "Overall Status: UNHEALTHY 🔴" in output(console)


def test_nothing_found(console):
    render_nothing_found(console, "jenkins", "app=jenkins")
    text = output(console)
    assert "No resources found in namespace 'jenkins' with label 'app=jenkins'" in text
    assert "KUBEGLANCE_NAMESPACE" in text
    assert "app=cjoc" in text


def test_error_is_single_line(console):
    render_error(console, RuntimeError("boom\nstack details"))
    assert output(console).strip() == "❌ Error: boom"


def test_refresh_footer(console):
    render_refresh_footer(console, 30.0)
    assert "Refreshing in 30 seconds" in output(console)
