from __future__ import annotations

from enum import Enum

from nexus_toolkit.results import ResultStatus, ToolkitAudit


class ReportFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    MARKDOWN = "markdown"


def generate_report(audit: ToolkitAudit, fmt: ReportFormat | str = ReportFormat.MARKDOWN) -> str:
    fmt = ReportFormat(fmt)
    if fmt is ReportFormat.JSON:
        return audit.to_json()
    if fmt is ReportFormat.TEXT:
        return _format_text(audit)
    return _format_markdown(audit)


def _status_label(status: ResultStatus) -> str:
    return status.value.upper()


def _format_text(audit: ToolkitAudit) -> str:
    lines = [
        f"Toolkit Audit: {audit.passed} passed, {audit.failed} failed, {audit.skipped} skipped",
        "",
    ]
    for r in audit.results:
        err = f" — {r.error}" if r.error else ""
        lines.append(f"  {_status_label(r.status)} {r.tool} ({r.duration_ms}ms){err}")
    return "\n".join(lines)


def _format_markdown(audit: ToolkitAudit) -> str:
    lines = [
        "# Toolkit Audit",
        "",
        "## Summary",
        "",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Passed | {audit.passed} |",
        f"| Failed | {audit.failed} |",
        f"| Skipped | {audit.skipped} |",
        "",
        "## Results",
        "",
        "| Tool | Status | Duration | Error |",
        "| --- | --- | --- | --- |",
    ]
    for r in audit.results:
        err = (r.error or "").replace("|", "\\|")
        lines.append(f"| {r.tool} | {r.status.value} | {r.duration_ms}ms | {err} |")
    return "\n".join(lines)
