from __future__ import annotations

from nexus_toolkit.caller import ToolCaller, load_bridge
from nexus_toolkit.config import Settings
from nexus_toolkit.results import ToolkitAudit
from nexus_toolkit.runner import run_toolkit_audit


def run(*, caller: ToolCaller | None = None, settings: Settings | None = None) -> ToolkitAudit:
    """
    Run the toolkit audit programmatically.

    When ``caller`` is omitted the live bridge named by ``settings.bridge`` is loaded.
    """

    if caller is None:
        caller = load_bridge((settings or Settings()).bridge)
    return run_toolkit_audit(caller)
