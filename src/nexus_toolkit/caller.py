from __future__ import annotations

import importlib
import json
from typing import Any, Callable, Protocol, runtime_checkable

from nexus_toolkit.config import Settings
from nexus_toolkit.errors import BridgeLoadError, ToolCallError
from nexus_toolkit.logging import get_logger

logger = get_logger(__name__)

ORCHESTRATE = "orchestrate"
CATALOG_REVIEW = "research_catalog_review"
REGISTRY_IMPORT = "registry_import"

CallFn = Callable[[str, dict[str, Any]], Any]


@runtime_checkable
class ToolCaller(Protocol):
    def call(self, tool: str, args: dict[str, Any]) -> Any: ...


def _unwrap_content(tool: str, raw: Any) -> Any:
    payload = raw
    # MCP tool results arrive as {"content": [{"type": "text", "text": "<json>"}], "isError": bool}.
    if isinstance(raw, dict) and isinstance(raw.get("content"), list):
        texts = [
            part["text"]
            for part in raw["content"]
            if isinstance(part, dict) and part.get("type") == "text" and isinstance(part.get("text"), str)
        ]
        text = "\n".join(texts)
        if raw.get("isError"):
            raise ToolCallError(tool, text or f"{tool} returned an error", response_body=raw)
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            return text
    if isinstance(payload, dict) and set(payload) == {"error"} and isinstance(payload["error"], str):
        raise ToolCallError(tool, payload["error"], response_body=payload)
    return payload


class LiveCaller:
    """Adapts a plain ``call_fn(tool, args)`` to :class:`ToolCaller`."""

    def __init__(self, call_fn: CallFn) -> None:
        self._call_fn = call_fn

    def call(self, tool: str, args: dict[str, Any]) -> Any:
        return _unwrap_content(tool, self._call_fn(tool, args))


def create_live_caller(call_fn: CallFn) -> ToolCaller:
    return LiveCaller(call_fn)


def is_live_mode(settings: Settings | None = None) -> bool:
    return (settings or Settings()).live


def load_bridge(target: str) -> ToolCaller:
    """Import ``module:factory`` and call the factory to build a caller.

    The factory defaults to ``create_mcp_caller`` when ``target`` names only a
    module.
    """

    module_name, _, factory_name = target.partition(":")
    factory_name = factory_name or "create_mcp_caller"
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        raise BridgeLoadError(target, f"{exc.__class__.__name__}: {exc}") from exc

    factory = getattr(module, factory_name, None)
    if not callable(factory):
        raise BridgeLoadError(target, f"module must export {factory_name}()")

    try:
        caller = factory()
    except Exception as exc:
        raise BridgeLoadError(target, f"{exc.__class__.__name__}: {exc}") from exc
    if callable(caller) and not isinstance(caller, ToolCaller):
        caller = create_live_caller(caller)
    if not isinstance(caller, ToolCaller):
        raise BridgeLoadError(target, f"{factory_name}() did not return a tool caller")

    logger.info("bridge_loaded", bridge=target, caller=type(caller).__name__)
    return caller
