from __future__ import annotations

__all__ = [
    "__version__",
    "ToolCaller",
    "create_live_caller",
    "ResultStatus",
    "ToolTestResult",
    "ToolkitAudit",
    "check_orchestrate",
    "check_catalog_review",
    "check_registry_import",
    "run_toolkit_audit",
    "ReportFormat",
    "generate_report",
]

__version__ = "0.1.0"

from .caller import ToolCaller, create_live_caller  # noqa: E402
from .results import ResultStatus, ToolTestResult, ToolkitAudit  # noqa: E402
from .runner import check_catalog_review, check_orchestrate, check_registry_import, run_toolkit_audit  # noqa: E402
from .report import ReportFormat, generate_report  # noqa: E402
