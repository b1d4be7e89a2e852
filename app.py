#!/usr/bin/env python3

import logging
import os
import re
from typing import Dict

import gradio as gr
import yaml
from pydantic import ValidationError

from kubelogs.config import settings
from kubelogs.kubectl import KubectlClient
from kubelogs.logs import get_logs
from kubelogs.resolver import LogsError
from kubelogs.schemas import (
    ClassifiedError,
    CronJobLogsReport,
    LogRequest,
    NoMatchesReport,
    Outcome,
    PodLogsReport,
    Report,
    ResourceKind,
    render,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


# ---------------------------------------------------------------------
# Core - Client
# ---------------------------------------------------------------------

def _get_client() -> KubectlClient:
    return KubectlClient()


# ---------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------

def _colorize_logs(text: str) -> str:
    if not text:
        return "<span style='color:#888;'>No logs</span>"

    html_lines = []
    for line in text.splitlines():
        if re.search(r"(error|failed|exception)", line, re.IGNORECASE):
            color = "#ff4b4b"
        elif re.search(r"warn", line, re.IGNORECASE):
            color = "#f7c843"
        elif re.search(r"(info|started|running|completed)", line, re.IGNORECASE):
            color = "#5ad55a"
        else:
            color = "#d0d0d0"

        safe = line.replace("<", "&lt;").replace(">", "&gt;")
        html_lines.append(f"<span style='color:{color};'>{safe}</span>")

    return "<br>".join(html_lines)


def _escape(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


def _header(text: str) -> str:
    return f"<div style='color:#7fb3ff;font-weight:bold;'>=== {_escape(text)} ===</div>"


def _error_html(text: str) -> str:
    return f"<span style='color:#ff4b4b;'>{_escape(text)}</span>"


def _outcome_html(outcome: Outcome) -> str:
    if isinstance(outcome, ClassifiedError):
        return _error_html(outcome.suggestion or outcome.message)
    return _colorize_logs(outcome)


def _pod_logs_html(logs: Dict[str, Outcome]) -> str:
    parts = []
    for pod, outcome in logs.items():
        parts.append(_header(pod))
        parts.append(_outcome_html(outcome))
    return "<br>".join(parts)


def report_to_html(report: Report) -> str:
    if isinstance(report, ClassifiedError):
        return _outcome_html(report)
    if isinstance(report, PodLogsReport):
        return _colorize_logs(report.logs)
    if isinstance(report, NoMatchesReport):
        return _error_html(report.message)
    if isinstance(report, CronJobLogsReport):
        parts = []
        for job, pods in report.jobs.items():
            parts.append(_header(f"job {job}"))
            parts.append(_error_html(pods.message) if isinstance(pods, NoMatchesReport) else _pod_logs_html(pods))
        return "<br>".join(parts)
    return _pod_logs_html(report.logs)


# ---------------------------------------------------------------------
# Logs
# ---------------------------------------------------------------------

def collect_logs(
    kind: str,
    name: str,
    namespace: str,
    label_selector: str,
    container: str,
    tail_lines: int,
    context: str,
    timestamps: bool,
    previous: bool,
    as_yaml: bool,
) -> str:
    try:
        request = LogRequest(
            resource_kind=kind,
            name=name.strip() or None,
            namespace=namespace.strip(),
            label_selector=label_selector.strip() or None,
            container=container.strip() or None,
            tail=int(tail_lines),
            context=context.strip() or None,
            timestamps=timestamps,
            previous=previous,
        )
    except ValidationError as e:
        return _error_html("; ".join(err["msg"] for err in e.errors()))

    try:
        report = get_logs(request, _get_client())
    except LogsError as e:
        report = e.error

    if as_yaml:
        return f"<pre>{_escape(yaml.safe_dump(render(report), sort_keys=False))}</pre>"
    return report_to_html(report)


# ---------------------------------------------------------------------
# Logs CSS
# ---------------------------------------------------------------------

TERMINAL_CSS = """
#logs_terminal {
    background-color: #111;
    color: #ddd;
    font-family: monospace;
    padding: 14px;
    border-radius: 8px;
    border: 1px solid #444;
    height: 520px;
    overflow-y: scroll;
    white-space: pre-wrap;
}
"""


# ---------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------

def build_app() -> gr.Blocks:
    with gr.Blocks(
        title="kubelogs: Kubernetes Workload Logs",
        css=TERMINAL_CSS,
    ) as demo:

        gr.Markdown("""
### 🔧 Environment
- `KUBECTL_BIN`
- `KUBECONFIG`
- `KUBELOGS_NAMESPACE`
- `KUBELOGS_TIMEOUT`
---
""")

        with gr.Tab("Workload Logs"):
            with gr.Row():
                with gr.Column():
                    kind = gr.Dropdown(
                        label="Resource kind",
                        choices=[k.value for k in ResourceKind],
                        value=ResourceKind.POD.value,
                    )
                    name = gr.Textbox(label="Name")
                    label_selector = gr.Textbox(
                        label="Label selector (label-group only)",
                        placeholder="app=web,tier=frontend",
                    )

                with gr.Column():
                    namespace = gr.Textbox(label="Namespace", value=settings.namespace)
                    container = gr.Textbox(label="Container (multi-container pods)")
                    context = gr.Textbox(label="kubectl context (optional)")

            with gr.Row():
                tail_lines = gr.Slider(10, 1000, step=10, value=100, label="Tail lines")
                timestamps = gr.Checkbox(label="Timestamps")
                previous = gr.Checkbox(label="Previous container")
                as_yaml = gr.Checkbox(label="Raw report (YAML)")

            get_logs_btn = gr.Button("Get logs", variant="primary")
            logs_box = gr.HTML(elem_id="logs_terminal", label="Logs")

            get_logs_btn.click(
                collect_logs,
                inputs=[
                    kind, name, namespace, label_selector, container,
                    tail_lines, context, timestamps, previous, as_yaml,
                ],
                outputs=logs_box,
            )

    return demo


app = build_app()

if __name__ == "__main__":
    port = int(os.getenv("PORT", "7860"))
    app.launch(server_name="0.0.0.0", server_port=port)
